"""
Unit-тесты для книги учёта в xlsx (openpyxl).
"""

from datetime import date, datetime

import pytest
from openpyxl import Workbook, load_workbook

from src.ledger.domain.exceptions import LedgerWriteError
from src.ledger.infrastructure import WorkbookLedgerBook
from src.ledger.s7_locator import LedgerLocator
from src.ledger.s8_reconciliation import ReconciliationEngine
from src.parsing.domain.exceptions import SalesReportError
from src.parsing.domain.models import ItemKey, ItemKind, ReportBlock
from src.parsing.s5_store import StoreResolver

SHEET = "2507月_売上"


@pytest.fixture
def ledger_path(tmp_path):
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET
    for day in range(1, 31):
        ws.cell(row=1, column=day + 2, value=datetime(2025, 7, day))
    # Последний день задан формулой без кешированного значения
    ws.cell(row=1, column=33, value="=AF1+1")
    ws.cell(row=2, column=1, value="マルタツ野木")
    ws.cell(row=2, column=2, value="当日売上")
    ws.cell(row=3, column=1, value="マルタツ野木")
    ws.cell(row=3, column=2, value="当日仕入費")
    ws.cell(row=2, column=35, value="=SUM(C2:AG2)")
    wb.create_sheet("2508月_売上")

    path = tmp_path / "ledger.xlsx"
    wb.save(path)
    return path


class TestWorkbookLedgerBook:
    """Чтение и запись xlsx."""

    def test_sheets(self, ledger_path):
        book = WorkbookLedgerBook(ledger_path)

        assert book.sheet_names == [SHEET, "2508月_売上"]
        assert book.get_sheet("2509月_売上") is None

    def test_read_values(self, ledger_path):
        sheet = WorkbookLedgerBook(ledger_path).get_sheet(SHEET)

        assert sheet.get_value(1, 3) == datetime(2025, 7, 1)
        assert sheet.get_value(2, 1) == "マルタツ野木"
        assert sheet.get_value(1, 33) is None
        assert sheet.max_row == 3

    def test_written_value_visible_before_save(self, ledger_path):
        sheet = WorkbookLedgerBook(ledger_path).get_sheet(SHEET)
        sheet.set_value(2, 31, 123456)
        assert sheet.get_value(2, 31) == 123456

    def test_save_keeps_formulas(self, ledger_path):
        book = WorkbookLedgerBook(ledger_path)
        book.get_sheet(SHEET).set_value(2, 31, 123456)
        book.save()

        ws = load_workbook(ledger_path)[SHEET]
        assert ws.cell(row=2, column=31).value == 123456
        assert ws.cell(row=2, column=35).value == "=SUM(C2:AG2)"
        assert ws.cell(row=1, column=33).value == "=AF1+1"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SalesReportError):
            WorkbookLedgerBook(tmp_path / "missing.xlsx")

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook", encoding="utf-8")
        with pytest.raises(SalesReportError):
            WorkbookLedgerBook(path)


def test_engine_on_workbook(ledger_path, report_config):
    book = WorkbookLedgerBook(ledger_path)
    engine = ReconciliationEngine(
        LedgerLocator(StoreResolver(report_config.stores)), report_config.items
    )
    block = ReportBlock(
        raw_store="【店舗】野木",
        canonical_store="マルタツ野木",
        date=date(2025, 7, 29),
        items={ItemKey.of(ItemKind.REVENUE): 123456, ItemKey.of(ItemKind.PURCHASE): 20000},
    )

    result = engine.transfer([block], book)

    assert result.processed == 1
    ws = load_workbook(ledger_path)[SHEET]
    assert ws.cell(row=2, column=31).value == 123456
    assert ws.cell(row=3, column=31).value == 20000


@pytest.fixture
def merged_ledger_path(ledger_path):
    wb = load_workbook(ledger_path)
    ws = wb[SHEET]
    ws.cell(row=4, column=1, value="クロリ小山")
    ws.cell(row=4, column=2, value="当日売上")
    # 7/29 (колонка 31) - часть объединения с 7/28, только для чтения
    ws.merge_cells(start_row=2, start_column=30, end_row=2, end_column=31)
    wb.save(ledger_path)
    return ledger_path


class TestReadOnlyCells:
    """Объединённые ячейки шаблона."""

    def test_write_to_merged_cell_raises(self, merged_ledger_path):
        sheet = WorkbookLedgerBook(merged_ledger_path).get_sheet(SHEET)

        with pytest.raises(LedgerWriteError) as exc_info:
            sheet.set_value(2, 31, 123456)

        assert (exc_info.value.row, exc_info.value.column) == (2, 31)
        assert sheet.get_value(2, 31) is None

    def test_committed_block_saved_after_write_error(self, merged_ledger_path, report_config):
        book = WorkbookLedgerBook(merged_ledger_path)
        engine = ReconciliationEngine(
            LedgerLocator(StoreResolver(report_config.stores)), report_config.items
        )
        blocks = [
            ReportBlock(
                raw_store="【店舗】クロリ",
                canonical_store="クロリ小山",
                date=date(2025, 7, 28),
                items={ItemKey.of(ItemKind.REVENUE): 45000},
            ),
            ReportBlock(
                raw_store="【店舗】野木",
                canonical_store="マルタツ野木",
                date=date(2025, 7, 29),
                items={ItemKey.of(ItemKind.REVENUE): 123456},
            ),
        ]

        result = engine.transfer(blocks, book)

        assert result.processed == 1
        assert result.errors == 1
        assert not result.aborted
        ws = load_workbook(merged_ledger_path)[SHEET]
        assert ws.cell(row=4, column=30).value == 45000
