"""
Домен Ledger: Сверка блоков отчётов с книгой учёта.

- Stage 7: Ledger Locator (лист периода, строки магазина, колонка даты)
- Stage 8: Reconciliation (повторы, аномалии, запись)

Вход: упорядоченные блоки из домена Parsing
Выход: TransferResult (контракт TransferResultDTO)
"""

from src.ledger.s7_locator import LedgerLocator, LedgerIndex, period_sheet_name
from src.ledger.s8_reconciliation import (
    ReconciliationEngine,
    TransferResult,
    ConflictPolicy,
    AutoOverwritePolicy,
    PromptOperatorPolicy,
    BlockDecision,
)
from src.ledger.infrastructure import InMemoryLedgerBook, InMemoryLedgerSheet, WorkbookLedgerBook

__all__ = [
    "LedgerLocator",
    "LedgerIndex",
    "period_sheet_name",
    "ReconciliationEngine",
    "TransferResult",
    "ConflictPolicy",
    "AutoOverwritePolicy",
    "PromptOperatorPolicy",
    "BlockDecision",
    "InMemoryLedgerBook",
    "InMemoryLedgerSheet",
    "WorkbookLedgerBook",
]
