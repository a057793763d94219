"""
Stage 7: Ledger Locator

ЦКП: Ячейка книги учёта для магазина + статьи + даты.
"""

from .stage import LedgerLocator, period_sheet_name
from .ledger_index import LedgerIndex, coerce_header_date

__all__ = [
    "LedgerLocator",
    "period_sheet_name",
    "LedgerIndex",
    "coerce_header_date",
]
