"""
Stage 5: Store Resolution

ЦКП: Канонический магазин и ранг для каждого блока.
"""

from .stage import StoreStage, StoreResult
from .store_resolver import (
    StoreResolver,
    substring_candidates,
    unique_substring_fallback,
)

__all__ = [
    "StoreStage",
    "StoreResult",
    "StoreResolver",
    "substring_candidates",
    "unique_substring_fallback",
]
