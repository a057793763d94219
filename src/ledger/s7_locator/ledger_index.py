"""
Ledger Index - Индексы строк и колонок листа периода.

ЦКП: O(1) поиск строк магазина и колонки даты вместо сканирования
листа на каждый блок. Семантика совпадений та же, что у сканирования:
первая колонка с датой побеждает.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from loguru import logger

from config.settings import (
    FIRST_DATE_COLUMN,
    HEADER_DATE_FORMATS,
    HEADER_ROW,
    ITEM_LABEL_COLUMN,
    LAST_DATE_COLUMN,
    SERIAL_DATE_EPOCH,
    STORE_LABEL_COLUMN,
)
from src.ledger.domain.interfaces import ILedgerSheet

# "2025-07-29 00:00:00", "2025-07-29T00:00:00": время отбрасывается
TIME_SEPARATOR = re.compile(r"[\sT]")


def coerce_header_date(value: Any) -> Optional[date]:
    """
    Дата из ячейки заголовка.

    Поддерживает datetime/date, серийный номер даты (эпоха 1899-12-30)
    и строку в одном из HEADER_DATE_FORMATS. Время отбрасывается.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            return SERIAL_DATE_EPOCH + timedelta(days=int(value))
        except OverflowError:
            return None
    if isinstance(value, str):
        text = TIME_SEPARATOR.split(value.strip(), maxsplit=1)[0]
        for fmt in HEADER_DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return None


def cell_label(value: Any) -> str:
    return "" if value is None else str(value).strip()


@dataclass
class LedgerIndex:
    """Индексы одного листа: магазин -> {статья: строка}, дата -> колонка."""
    sheet_name: str
    store_rows: Dict[str, Dict[str, int]] = field(default_factory=dict)
    date_columns: Dict[date, int] = field(default_factory=dict)
    column_dates: Dict[int, date] = field(default_factory=dict)

    @classmethod
    def build(cls, sheet: ILedgerSheet) -> "LedgerIndex":
        index = cls(sheet_name=sheet.name)

        for row in range(1, sheet.max_row + 1):
            store = cell_label(sheet.get_value(row, STORE_LABEL_COLUMN))
            if not store:
                continue
            item = cell_label(sheet.get_value(row, ITEM_LABEL_COLUMN))
            rows = index.store_rows.setdefault(store, {})
            if item in rows:
                logger.warning(
                    f"[LedgerIndex] {sheet.name}: повтор строки ({store}, {item}) "
                    f"в строке {row}, используется {rows[item]}"
                )
                continue
            rows[item] = row

        last_column = min(LAST_DATE_COLUMN, sheet.max_column)
        for column in range(FIRST_DATE_COLUMN, last_column + 1):
            header_date = coerce_header_date(sheet.get_value(HEADER_ROW, column))
            if header_date is None:
                continue
            index.column_dates[column] = header_date
            index.date_columns.setdefault(header_date, column)

        logger.debug(
            f"[LedgerIndex] {sheet.name}: {len(index.store_rows)} магазинов, "
            f"{len(index.date_columns)} дат"
        )
        return index

    @property
    def store_labels(self) -> List[str]:
        return list(self.store_rows)

    def rows_for(self, store: str) -> Optional[Dict[str, int]]:
        return self.store_rows.get(store)

    def column_for(self, target_date: date) -> Optional[int]:
        return self.date_columns.get(target_date)

    def date_of_column(self, column: int) -> Optional[date]:
        return self.column_dates.get(column)
