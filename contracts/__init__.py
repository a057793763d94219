"""
Контракты DTO между доменами проекта Sales Report Ledger.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Parsing -> Ledger: ReportBlockDTO (report_dto.py)
- Ledger -> Orchestrator: TransferResultDTO, CellWriteDTO (report_dto.py)
"""

from .report_dto import ReportBlockDTO, CellWriteDTO, TransferResultDTO

__all__ = [
    "ReportBlockDTO",
    "CellWriteDTO",
    "TransferResultDTO",
]
