"""
In-memory книга учёта (тесты, пробные прогоны).
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from src.ledger.domain.interfaces import ILedgerBook, ILedgerSheet


class InMemoryLedgerSheet(ILedgerSheet):
    """Лист как словарь {(row, column): value}."""

    def __init__(self, name: str, cells: Optional[Dict[Tuple[int, int], Any]] = None):
        self._name = name
        self.cells: Dict[Tuple[int, int], Any] = dict(cells or {})

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[Any]]) -> "InMemoryLedgerSheet":
        """Лист из списка строк (первая строка - row 1, первый элемент - колонка A)."""
        cells = {}
        for row_index, row in enumerate(rows, start=1):
            for column_index, value in enumerate(row, start=1):
                if value is not None:
                    cells[(row_index, column_index)] = value
        return cls(name, cells)

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_row(self) -> int:
        return max((row for row, _ in self.cells), default=0)

    @property
    def max_column(self) -> int:
        return max((column for _, column in self.cells), default=0)

    def get_value(self, row: int, column: int) -> Any:
        return self.cells.get((row, column))

    def set_value(self, row: int, column: int, value: Any) -> None:
        self.cells[(row, column)] = value


class InMemoryLedgerBook(ILedgerBook):
    """Книга из набора InMemoryLedgerSheet."""

    def __init__(self, sheets: Optional[List[InMemoryLedgerSheet]] = None):
        self.sheets: Dict[str, InMemoryLedgerSheet] = {sheet.name: sheet for sheet in sheets or []}
        self.save_count = 0

    @property
    def sheet_names(self) -> List[str]:
        return list(self.sheets)

    def add_sheet(self, sheet: InMemoryLedgerSheet) -> None:
        self.sheets[sheet.name] = sheet

    def get_sheet(self, name: str) -> Optional[InMemoryLedgerSheet]:
        return self.sheets.get(name)

    def save(self) -> None:
        self.save_count += 1
        logger.debug(f"[InMemoryLedgerBook] Сохранение #{self.save_count}")
