"""
Unit-тесты для Stage 7: Ledger Locator.

ЦКП: Точное совпадение магазина, единственное частичное - fallback,
лист периода по году и месяцу.
"""

from datetime import date

import pytest

from conftest import build_period_sheet, day_column, store_row
from src.ledger.domain.exceptions import DateColumnNotFoundError, TargetPeriodMissingError
from src.ledger.infrastructure import InMemoryLedgerBook
from src.ledger.s7_locator import LedgerLocator, period_sheet_name
from src.parsing.domain.exceptions import StoreNotFoundError
from src.parsing.s5_store import StoreResolver


@pytest.fixture
def locator(report_config):
    return LedgerLocator(StoreResolver(report_config.stores), auto_accept_unique_substring=True)


def test_period_sheet_name():
    assert period_sheet_name(date(2025, 7, 29)) == "2507月_売上"
    assert period_sheet_name(date(2026, 1, 3)) == "2601月_売上"


class TestOpenPeriod:
    """Поиск листа периода."""

    def test_found(self, locator, ledger_book):
        sheet = locator.open_period(ledger_book, date(2025, 7, 29))
        assert sheet.name == "2507月_売上"

    def test_missing(self, locator, ledger_book):
        with pytest.raises(TargetPeriodMissingError) as exc_info:
            locator.open_period(ledger_book, date(2025, 8, 1))
        assert exc_info.value.sheet_name == "2508月_売上"


class TestFindStoreRows:
    """Строки магазина."""

    def test_canonical_store(self, locator, july_sheet):
        store, rows = locator.find_store_rows(july_sheet, "【店舗】野木", "マルタツ野木")

        assert store == "マルタツ野木"
        assert rows["当日売上"] == store_row("マルタツ野木", "当日売上")

    def test_resolves_raw_store(self, locator, july_sheet):
        store, _ = locator.find_store_rows(july_sheet, "店舗: 野木店")
        assert store == "マルタツ野木"

    def test_unique_substring_over_ledger_labels(self, locator):
        sheet = build_period_sheet(2025, 7, stores=["マルタツ野木", "新店舗ひばり"])
        store, rows = locator.find_store_rows(sheet, "【店舗】ひばり")

        assert store == "新店舗ひばり"
        assert rows["当日売上"] == store_row("新店舗ひばり", "当日売上", stores=["マルタツ野木", "新店舗ひばり"])

    def test_ambiguous_ledger_labels(self, locator):
        sheet = build_period_sheet(2025, 7, stores=["ひばり東", "ひばり西"])
        with pytest.raises(StoreNotFoundError) as exc_info:
            locator.find_store_rows(sheet, "【店舗】ひばり")
        assert exc_info.value.candidates == ["ひばり東", "ひばり西"]

    def test_fallback_disabled(self, report_config):
        locator = LedgerLocator(StoreResolver(report_config.stores), auto_accept_unique_substring=False)
        sheet = build_period_sheet(2025, 7, stores=["新店舗ひばり"])

        with pytest.raises(StoreNotFoundError):
            locator.find_store_rows(sheet, "【店舗】ひばり")

    def test_store_not_in_ledger(self, locator, july_sheet):
        with pytest.raises(StoreNotFoundError):
            locator.find_store_rows(july_sheet, "【店舗】三毳")


class TestFindDateColumn:
    """Колонка даты."""

    def test_found(self, locator, july_sheet):
        assert locator.find_date_column(july_sheet, date(2025, 7, 29)) == day_column(29)

    def test_missing(self, locator, july_sheet):
        with pytest.raises(DateColumnNotFoundError):
            locator.find_date_column(july_sheet, date(2025, 8, 1))

    def test_index_built_once(self, locator, july_sheet):
        first = locator.index_for(july_sheet)
        assert locator.index_for(july_sheet) is first
        locator.invalidate()
        assert locator.index_for(july_sheet) is not first
