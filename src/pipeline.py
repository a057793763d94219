"""
Sales Report Pipeline - Оркестратор доменов Parsing и Ledger.

Режимы:
- format_only: разбор и текст для проверки (книга учёта не трогается)
- transfer: разбор + сверка + запись в книгу учёта
"""

from datetime import date
from typing import Callable, Optional, Tuple

from loguru import logger

from src.ledger.domain.interfaces import ILedgerBook
from src.ledger.s7_locator import LedgerLocator
from src.ledger.s8_reconciliation import ConflictPolicy, ReconciliationEngine, TransferResult
from src.parsing.pipeline import ParseResult, ReportPipeline
from src.parsing.rules import ConfigLoader


class SalesReportPipeline:
    """
    Полный пайплайн: текст из чата -> книга учёта.

    ЦКП: TransferResult с итогами переноса.
    """

    def __init__(
        self,
        config_loader: Optional[ConfigLoader] = None,
        policy: Optional[ConflictPolicy] = None,
        today: Callable[[], date] = date.today,
        auto_accept_unique_substring: Optional[bool] = None,
    ):
        """
        Args:
            config_loader: Загрузчик таблиц правил
            policy: Политика конфликтов (по умолчанию - пакетный режим)
            today: Источник текущей даты
            auto_accept_unique_substring: Переопределение fallback-шага магазинов
        """
        self.config = (config_loader or ConfigLoader()).load(
            auto_accept_unique_substring=auto_accept_unique_substring
        )
        self.parser = ReportPipeline(config=self.config, today=today)
        self.locator = LedgerLocator(
            self.parser.store_resolver,
            auto_accept_unique_substring=self.config.stores.auto_accept_unique_substring,
        )
        self.engine = ReconciliationEngine(self.locator, self.config.items, policy=policy)

    def parse(self, text: str) -> ParseResult:
        return self.parser.parse(text)

    def format_only(self, text: str) -> str:
        """Текст для проверки: упорядоченные блоки через пустую строку."""
        return self.parse(text).review_text()

    def transfer(self, text: str, book: ILedgerBook) -> Tuple[ParseResult, TransferResult]:
        """
        Разбирает текст и переносит блоки в книгу учёта.

        Raises:
            NoInputDataError: пустой вход
        """
        parsed = self.parse(text)
        logger.info(f"[SalesReportPipeline] К переносу: {len(parsed.blocks)} блоков")
        result = self.engine.transfer(parsed.blocks, book, discarded=parsed.discarded)
        return parsed, result
