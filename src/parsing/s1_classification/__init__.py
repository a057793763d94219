"""
Stage 1: Line Classification

ЦКП: Тип каждой строки отчёта.
"""

from .stage import ClassificationStage, ClassificationResult, ClassifiedLine
from .line_classifier import LineClassifier, LineType

__all__ = [
    "ClassificationStage",
    "ClassificationResult",
    "ClassifiedLine",
    "LineClassifier",
    "LineType",
]
