"""
Stage 7: Ledger Locator

ЦКП: (строка, колонка) в листе периода для магазина + статьи + даты.

- Лист периода: "{yy}{mm}月_売上"
- Строки магазина: точное совпадение колонки A с каноническим
  идентификатором (или нормализованным текстом), иначе единственное
  частичное совпадение среди меток колонки A
- Колонка даты: строка заголовка, колонки C..AG, первая подходящая
"""

from datetime import date
from typing import Dict, Optional, Tuple

from loguru import logger

from config.settings import AUTO_MATCH_UNIQUE_SUBSTRING, LEDGER_SHEET_TEMPLATE
from src.ledger.domain.exceptions import DateColumnNotFoundError, TargetPeriodMissingError
from src.ledger.domain.interfaces import ILedgerBook, ILedgerSheet
from src.parsing.domain.exceptions import StoreNotFoundError
from src.parsing.domain.interfaces import IStoreResolver
from src.parsing.s5_store import substring_candidates, unique_substring_fallback
from .ledger_index import LedgerIndex


def period_sheet_name(target_date: date) -> str:
    """Имя листа периода: 2025-07-29 -> "2507月_売上"."""
    return LEDGER_SHEET_TEMPLATE.format(period=target_date.strftime("%y%m"))


class LedgerLocator:
    """
    Поиск ячеек в книге учёта.

    Индекс листа строится один раз на лист и переиспользуется
    для всех блоков прогона.
    """

    def __init__(
        self,
        resolver: IStoreResolver,
        auto_accept_unique_substring: bool = AUTO_MATCH_UNIQUE_SUBSTRING,
    ):
        self.resolver = resolver
        self.auto_accept_unique_substring = auto_accept_unique_substring
        self._indexes: Dict[str, LedgerIndex] = {}

    def open_period(self, book: ILedgerBook, target_date: date) -> ILedgerSheet:
        sheet_name = period_sheet_name(target_date)
        sheet = book.get_sheet(sheet_name)
        if sheet is None:
            raise TargetPeriodMissingError(sheet_name, target_date, component="LedgerLocator")
        return sheet

    def index_for(self, sheet: ILedgerSheet) -> LedgerIndex:
        index = self._indexes.get(sheet.name)
        if index is None:
            index = LedgerIndex.build(sheet)
            self._indexes[sheet.name] = index
        return index

    def invalidate(self) -> None:
        self._indexes.clear()

    def find_store_rows(
        self,
        sheet: ILedgerSheet,
        raw_store: str,
        canonical_store: Optional[str] = None,
    ) -> Tuple[str, Dict[str, int]]:
        """
        Строки магазина на листе.

        Returns:
            (метка магазина в колонке A, {метка статьи: номер строки})

        Raises:
            StoreNotFoundError: нет точного и единственного частичного совпадения
        """
        name = canonical_store or self._store_name(raw_store)
        index = self.index_for(sheet)

        rows = index.rows_for(name)
        if rows:
            return name, dict(rows)

        if self.auto_accept_unique_substring:
            matched = unique_substring_fallback(name, index.store_labels)
            if matched:
                logger.info(f"[LedgerLocator] Автосопоставление: {name} -> {matched}")
                return matched, dict(index.rows_for(matched))

        raise StoreNotFoundError(
            raw_store,
            component="LedgerLocator",
            candidates=substring_candidates(name, index.store_labels),
        )

    def find_date_column(self, sheet: ILedgerSheet, target_date: date) -> int:
        """
        Raises:
            DateColumnNotFoundError: в заголовке нет такой даты
        """
        column = self.index_for(sheet).column_for(target_date)
        if column is None:
            raise DateColumnNotFoundError(sheet.name, target_date, component="LedgerLocator")
        return column

    def date_of_column(self, sheet: ILedgerSheet, column: int) -> Optional[date]:
        return self.index_for(sheet).date_of_column(column)

    def _store_name(self, raw_store: str) -> str:
        try:
            return self.resolver.resolve(raw_store)
        except StoreNotFoundError:
            return self.resolver.normalize(raw_store)
