"""
Книга учёта в xlsx (openpyxl).

Две загрузки одного файла:
- рабочая книга с формулами: в неё пишем и её сохраняем (шаблоны
  и итоговые формулы листа не теряются);
- книга с data_only=True: из неё читаем вычисленные значения
  (заголовки дат часто заданы формулами).
Записанные в этом прогоне ячейки читаются из памяти.
"""

from pathlib import Path
from zipfile import BadZipFile
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.ledger.domain.exceptions import LedgerWriteError
from src.ledger.domain.interfaces import ILedgerBook, ILedgerSheet
from src.parsing.domain.exceptions import SalesReportError


class WorkbookLedgerSheet(ILedgerSheet):
    """Лист openpyxl с чтением вычисленных значений."""

    def __init__(self, worksheet, values_worksheet):
        self._ws = worksheet
        self._values = values_worksheet
        self._written: Dict[Tuple[int, int], Any] = {}

    @property
    def name(self) -> str:
        return self._ws.title

    @property
    def max_row(self) -> int:
        return self._ws.max_row

    @property
    def max_column(self) -> int:
        return self._ws.max_column

    def get_value(self, row: int, column: int) -> Any:
        if (row, column) in self._written:
            return self._written[(row, column)]

        value = self._values.cell(row=row, column=column).value
        if value is not None:
            return value

        # Формула без кешированного значения (файл не пересчитывался)
        raw = self._ws.cell(row=row, column=column).value
        if isinstance(raw, str) and raw.startswith("="):
            return None
        return raw

    def set_value(self, row: int, column: int, value: Any) -> None:
        """
        Raises:
            LedgerWriteError: ячейка только для чтения (MergedCell) или
                значение не принимается openpyxl
        """
        try:
            self._ws.cell(row=row, column=column, value=value)
        except (AttributeError, ValueError) as e:
            raise LedgerWriteError(
                self.name, row, column, component="WorkbookLedgerSheet", original_error=e
            )
        self._written[(row, column)] = value


class WorkbookLedgerBook(ILedgerBook):
    """
    Книга учёта в xlsx файле.

    Args:
        path: Путь к .xlsx
    """

    def __init__(self, path):
        self.path = Path(path)
        if not self.path.exists():
            raise SalesReportError(
                f"Файл книги учёта не найден: {self.path}", component="WorkbookLedgerBook"
            )

        try:
            self._workbook = load_workbook(self.path)
            self._values_workbook = load_workbook(self.path, data_only=True)
        except (InvalidFileException, BadZipFile, OSError) as e:
            raise SalesReportError(
                f"Не удалось открыть книгу учёта: {self.path}",
                component="WorkbookLedgerBook",
                original_error=e,
            )

        self._sheets: Dict[str, WorkbookLedgerSheet] = {}
        logger.info(f"[WorkbookLedgerBook] Открыта {self.path.name}: {len(self.sheet_names)} листов")

    @property
    def sheet_names(self) -> List[str]:
        return list(self._workbook.sheetnames)

    def get_sheet(self, name: str) -> Optional[WorkbookLedgerSheet]:
        if name not in self._workbook.sheetnames:
            return None
        if name not in self._sheets:
            self._sheets[name] = WorkbookLedgerSheet(
                self._workbook[name], self._values_workbook[name]
            )
        return self._sheets[name]

    def save(self, path=None) -> None:
        target = Path(path) if path else self.path
        self._workbook.save(target)
        logger.info(f"[WorkbookLedgerBook] Сохранено: {target}")
