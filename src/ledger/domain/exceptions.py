"""
Исключения для домена Ledger.

Ошибки поиска (магазин / дата / лист периода) пропускают блок,
конфликты сверки требуют решения политики, аномалия прерывает прогон.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from src.parsing.domain.exceptions import SalesReportError


class LedgerLookupError(SalesReportError):
    """Не удалось найти ячейку для блока: блок пропускается."""
    pass


class LedgerWriteError(SalesReportError):
    """Ячейка книги учёта не принимает запись (объединённая ячейка, тип значения)."""

    def __init__(
        self,
        sheet_name: str,
        row: int,
        column: int,
        component: str = None,
        original_error: Exception = None,
    ):
        self.sheet_name = sheet_name
        self.row = row
        self.column = column
        super().__init__(
            f"Не удалось записать ячейку ({row}, {column}) на листе '{sheet_name}'",
            component=component,
            original_error=original_error,
        )


class TargetPeriodMissingError(LedgerLookupError):
    """Нет листа периода (месяца) для даты блока."""

    def __init__(self, sheet_name: str, target_date: date, component: str = None):
        self.sheet_name = sheet_name
        self.target_date = target_date
        super().__init__(
            f"Лист периода '{sheet_name}' не найден для даты {target_date}",
            component=component,
        )


class DateColumnNotFoundError(LedgerLookupError):
    """В строке заголовка нет колонки для даты."""

    def __init__(self, sheet_name: str, target_date: date, component: str = None):
        self.sheet_name = sheet_name
        self.target_date = target_date
        super().__init__(
            f"Колонка даты {target_date} не найдена на листе '{sheet_name}'",
            component=component,
        )


class DuplicateDateConflict(SalesReportError):
    """В целевой колонке уже есть данные по проверяемым статьям."""

    def __init__(self, store: str, target_date: date, existing: Dict[str, object], component: str = None):
        self.store = store
        self.target_date = target_date
        self.existing = dict(existing)
        details = ", ".join(f"{label}={value}" for label, value in self.existing.items())
        super().__init__(
            f"Данные за {target_date} для '{store}' уже есть: {details}",
            component=component,
        )


class PreviousDayIdenticalAnomaly(SalesReportError):
    """Суммы совпадают с предыдущим днём: похоже на повторную отправку."""

    def __init__(
        self,
        store: str,
        target_date: date,
        previous_date: Optional[date],
        compared: List[Tuple[str, int]],
        component: str = None,
    ):
        self.store = store
        self.target_date = target_date
        self.previous_date = previous_date
        self.compared = list(compared)
        details = ", ".join(f"{label}={amount:,}" for label, amount in self.compared)
        super().__init__(
            f"'{store}' {target_date}: суммы совпадают с {previous_date} ({details})",
            component=component,
        )


class TransferAborted(SalesReportError):
    """Оператор прервал перенос."""

    def __init__(self, reason: str, component: str = None):
        self.reason = reason
        super().__init__(reason, component=component)
