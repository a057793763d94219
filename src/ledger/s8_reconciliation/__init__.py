"""
Stage 8: Reconciliation

ЦКП: Проверки повторов и запись сумм в книгу учёта.
"""

from .stage import ReconciliationEngine, TransferResult, CellWrite, to_amount, has_data
from .policies import (
    ConflictPolicy,
    AutoOverwritePolicy,
    PromptOperatorPolicy,
    BlockDecision,
    console_ask,
)

__all__ = [
    "ReconciliationEngine",
    "TransferResult",
    "CellWrite",
    "to_amount",
    "has_data",
    "ConflictPolicy",
    "AutoOverwritePolicy",
    "PromptOperatorPolicy",
    "BlockDecision",
    "console_ask",
]
