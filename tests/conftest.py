"""
Общие фикстуры тестов.

Лист периода в тестах:
- строка 1: даты месяца с колонки C (день d -> колонка d + 2)
- строки 2..: (магазин, статья) для каждого магазина из STORES
"""

import calendar
import sys
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.ledger.infrastructure import InMemoryLedgerBook, InMemoryLedgerSheet
from src.ledger.s7_locator import period_sheet_name
from src.parsing.rules import ConfigLoader

FIXED_TODAY = date(2025, 7, 31)

STORES = ["マルタツ野木", "マルキン高崎", "クロリ小山"]
ITEMS = ["当日売上", "当日仕入費", "当日人件費", "P/A", "社員"]


def build_period_sheet(year: int, month: int, stores=STORES, items=ITEMS) -> InMemoryLedgerSheet:
    days = calendar.monthrange(year, month)[1]
    header = [None, None] + [date(year, month, day) for day in range(1, days + 1)]
    rows = [header]
    for store in stores:
        for item in items:
            rows.append([store, item])
    return InMemoryLedgerSheet.from_rows(period_sheet_name(date(year, month, 1)), rows)


def store_row(store: str, item: str, stores=STORES, items=ITEMS) -> int:
    return 2 + stores.index(store) * len(items) + items.index(item)


def day_column(day: int) -> int:
    return day + 2


@pytest.fixture
def report_config():
    ConfigLoader.clear_cache()
    return ConfigLoader().load()


@pytest.fixture
def today():
    return lambda: FIXED_TODAY


@pytest.fixture
def july_sheet():
    return build_period_sheet(2025, 7)


@pytest.fixture
def ledger_book(july_sheet):
    return InMemoryLedgerBook([july_sheet])
