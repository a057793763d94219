"""
Domain слой домена Ledger.
"""

from .interfaces import ILedgerSheet, ILedgerBook

from .exceptions import (
    LedgerLookupError,
    LedgerWriteError,
    TargetPeriodMissingError,
    DateColumnNotFoundError,
    DuplicateDateConflict,
    PreviousDayIdenticalAnomaly,
    TransferAborted,
)

__all__ = [
    # Интерфейсы
    "ILedgerSheet",
    "ILedgerBook",

    # Исключения
    "LedgerLookupError",
    "LedgerWriteError",
    "TargetPeriodMissingError",
    "DateColumnNotFoundError",
    "DuplicateDateConflict",
    "PreviousDayIdenticalAnomaly",
    "TransferAborted",
]
