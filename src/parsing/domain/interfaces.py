"""
Интерфейсы (абстрактные классы) для домена Parsing.

Домен Parsing отвечает за:
1. Классификацию и форматирование строк
2. Сборку блоков отчётов
3. Упорядочивание строк и блоков
4. Сопоставление магазинов с реестром
"""

from abc import ABC, abstractmethod
from typing import Optional


class IStoreResolver(ABC):
    """Интерфейс сопоставления строки магазина с каноническим идентификатором."""

    @abstractmethod
    def normalize(self, raw_store: str) -> str:
        """Очищает строку магазина от меток, пробелов и суффикса 店."""
        pass

    @abstractmethod
    def resolve(self, raw_store: str) -> str:
        """
        Возвращает канонический идентификатор магазина.

        Raises:
            StoreNotFoundError: если сопоставление не найдено или неоднозначно
        """
        pass

    @abstractmethod
    def rank_of(self, store_id: Optional[str]) -> Optional[int]:
        """Позиция магазина в реестре (None - вне реестра)."""
        pass


class IReportParser(ABC):
    """Интерфейс разбора текста отчётов (этапы 1-6)."""

    @abstractmethod
    def parse(self, text: str):
        """
        Разбирает текст отчётов.

        Args:
            text: Многострочный текст из чата

        Returns:
            ParseResult: упорядоченные валидные блоки и статистика
        """
        pass
