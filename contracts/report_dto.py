"""
DTO контракт: Parsing -> Ledger -> Оркестратор

Разобранный блок отчёта и итог переноса в книгу учёта.
"""

from datetime import date as Date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportBlockDTO(BaseModel):
    """Разобранный блок отчёта (магазин + дата + статьи)."""

    raw_store: str = Field(..., description="Строка магазина как в отчёте")
    canonical_store: Optional[str] = Field(None, description="Идентификатор магазина из реестра")
    store_rank: Optional[int] = Field(None, description="Позиция в реестре (None - вне реестра)")
    date: Date = Field(..., description="Дата отчёта")
    items: Dict[str, int] = Field(..., description="Метка статьи -> сумма в иенах")
    lines: List[str] = Field(default_factory=list, description="Отформатированные строки блока")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("items")
    @classmethod
    def validate_items(cls, v: Dict[str, int]) -> Dict[str, int]:
        if not v:
            raise ValueError("Блок без статей")
        negative = [label for label, amount in v.items() if amount < 0]
        if negative:
            raise ValueError(f"Отрицательные суммы: {negative}")
        return v


class CellWriteDTO(BaseModel):
    """Одна записанная ячейка книги учёта."""

    sheet: str = Field(..., description="Лист периода")
    row: int = Field(..., ge=1)
    column: int = Field(..., ge=1)
    store: str = Field(..., description="Метка магазина в колонке A")
    item_label: str = Field(..., description="Метка статьи в колонке B")
    amount: int = Field(..., ge=0, description="Записанная сумма")

    model_config = ConfigDict(frozen=True)


class TransferResultDTO(BaseModel):
    """Итог прогона переноса."""

    processed: int = Field(0, ge=0, description="Перенесено блоков")
    errors: int = Field(0, ge=0, description="Блоков с ошибкой")
    skipped: int = Field(0, ge=0, description="Пропущено оператором")
    discarded: int = Field(0, ge=0, description="Отброшено на разборе")
    aborted: bool = Field(False, description="Прогон прерван")
    abort_reason: Optional[str] = Field(None, description="Причина прерывания")
    writes: List[CellWriteDTO] = Field(default_factory=list)
    failures: List[str] = Field(default_factory=list, description="Сообщения об ошибках блоков")

    model_config = ConfigDict(frozen=True)
