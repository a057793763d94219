"""
Интерфейсы (абстрактные классы) для домена Ledger.

Книга учёта: один лист на календарный месяц, строки - (магазин, статья),
колонки - даты. Ядро читает ячейки и пишет значения, структуру не меняет.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class ILedgerSheet(ABC):
    """Лист периода (1-based индексы строк и колонок)."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def max_row(self) -> int:
        pass

    @property
    @abstractmethod
    def max_column(self) -> int:
        pass

    @abstractmethod
    def get_value(self, row: int, column: int) -> Any:
        pass

    @abstractmethod
    def set_value(self, row: int, column: int, value: Any) -> None:
        pass


class ILedgerBook(ABC):
    """Книга учёта (набор листов периодов)."""

    @property
    @abstractmethod
    def sheet_names(self) -> List[str]:
        pass

    @abstractmethod
    def get_sheet(self, name: str) -> Optional[ILedgerSheet]:
        """Лист по имени или None."""
        pass

    @abstractmethod
    def save(self) -> None:
        pass
