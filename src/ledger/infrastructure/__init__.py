"""
Infrastructure слой домена Ledger: хранилища книги учёта.
"""

from .memory_ledger import InMemoryLedgerBook, InMemoryLedgerSheet
from .workbook_ledger import WorkbookLedgerBook, WorkbookLedgerSheet

__all__ = [
    "InMemoryLedgerBook",
    "InMemoryLedgerSheet",
    "WorkbookLedgerBook",
    "WorkbookLedgerSheet",
]
