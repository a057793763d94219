"""
Домен Parsing: Разбор суточных отчётов о продажах из чата.

Архитектура: 6-этапный пайплайн
- Stage 1: Classification (тип строки)
- Stage 2: Formatting (даты, суммы, роли)
- Stage 3: Assembly (блоки по якорям, статьи)
- Stage 4: Line Ordering (порядок строк в блоке)
- Stage 5: Store (канонический магазин и ранг)
- Stage 6: Block Ordering (дата, ранг)

Вход: многострочный текст
Выход: ParseResult (упорядоченные валидные блоки)
"""

from src.parsing.pipeline import ReportPipeline, ParseResult
from src.parsing.rules import ConfigLoader, ReportConfig

# Stage exports
from src.parsing.s1_classification import ClassificationStage, LineClassifier, LineType
from src.parsing.s2_formatting import FieldFormatter
from src.parsing.s3_assembly import AssemblyStage, DateParser, ItemExtractor
from src.parsing.s4_line_ordering import LineOrderer
from src.parsing.s5_store import StoreStage, StoreResolver
from src.parsing.s6_block_ordering import BlockOrderer

__all__ = [
    # Pipeline
    "ReportPipeline",
    "ParseResult",
    "ConfigLoader",
    "ReportConfig",
    # Stages
    "ClassificationStage",
    "LineClassifier",
    "LineType",
    "FieldFormatter",
    "AssemblyStage",
    "DateParser",
    "ItemExtractor",
    "LineOrderer",
    "StoreStage",
    "StoreResolver",
    "BlockOrderer",
]
