"""
Stage 5: Store Resolution

ЦКП: У каждого блока канонический магазин и ранг (если найден).
Нераспознанный магазин не отбрасывает блок: он уходит в конец
порядка, а поиск строк в книге учёта работает по сырому тексту.
"""

from dataclasses import dataclass, field
from typing import List

from loguru import logger

from src.parsing.domain.exceptions import StoreNotFoundError
from src.parsing.domain.interfaces import IStoreResolver
from src.parsing.domain.models import ReportBlock


@dataclass
class StoreResult:
    """Результат Stage 5."""
    resolved: int = 0
    unresolved: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "resolved": self.resolved,
            "unresolved": list(self.unresolved),
        }


class StoreStage:
    """Stage 5: Сопоставление магазинов блоков."""

    def __init__(self, resolver: IStoreResolver):
        self.resolver = resolver

    def process(self, blocks: List[ReportBlock]) -> StoreResult:
        result = StoreResult()

        for block in blocks:
            try:
                block.canonical_store = self.resolver.resolve(block.raw_store)
            except StoreNotFoundError as e:
                block.canonical_store = None
                result.unresolved.append(block.raw_store)
                logger.warning(f"[Stage 5: Store] {e.message}")
            else:
                result.resolved += 1
            block.store_rank = self.resolver.rank_of(block.canonical_store)

        logger.info(
            f"[Stage 5: Store] Сопоставлено: {result.resolved}, "
            f"не найдено: {len(result.unresolved)}"
        )
        return result
