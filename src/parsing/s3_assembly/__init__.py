"""
Stage 3: Report Assembly

ЦКП: Блоки отчётов с датой, магазином и статьями.
"""

from .stage import AssemblyStage, AssemblyResult
from .date_parser import DateParser
from .item_extractor import ItemExtractor, ITEM_RULES

__all__ = [
    "AssemblyStage",
    "AssemblyResult",
    "DateParser",
    "ItemExtractor",
    "ITEM_RULES",
]
