"""
Stage 1: Line Classification

ЦКП: Каждая строка входного текста помечена типом, непарсимые учтены.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from loguru import logger

from src.parsing.rules.rule_models import ClassificationRules
from .line_classifier import LineClassifier, LineType


@dataclass
class ClassifiedLine:
    """Строка с типом и номером во входном тексте."""
    text: str
    line_type: LineType
    line_number: int

    @property
    def is_kept(self) -> bool:
        return self.line_type in (LineType.ANCHOR, LineType.INCLUDABLE)


@dataclass
class ClassificationResult:
    """Результат Stage 1."""
    lines: List[ClassifiedLine] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def kept_lines(self) -> List[ClassifiedLine]:
        return [line for line in self.lines if line.is_kept]

    @property
    def unparseable_count(self) -> int:
        return self.counts.get(LineType.UNPARSEABLE.value, 0)

    def to_dict(self) -> dict:
        return {
            "total_lines": len(self.lines),
            "kept_lines": len(self.kept_lines),
            "counts": dict(self.counts),
        }


class ClassificationStage:
    """
    Stage 1: Классификация строк.

    Вход: сырой многострочный текст.
    Выход: ClassificationResult (строки обрезаны по краям).
    """

    def __init__(self, rules: ClassificationRules, classifier: LineClassifier = None):
        self.classifier = classifier or LineClassifier(rules)

    def process(self, text: str) -> ClassificationResult:
        lines = []
        counter = Counter()

        for number, raw_line in enumerate(text.splitlines()):
            trimmed = raw_line.strip()
            line_type = self.classifier.classify(trimmed)
            counter[line_type.value] += 1
            lines.append(ClassifiedLine(text=trimmed, line_type=line_type, line_number=number))

        result = ClassificationResult(lines=lines, counts=dict(counter))
        logger.info(
            f"[Stage 1: Classification] Строк: {len(lines)}, "
            f"оставлено: {len(result.kept_lines)}, "
            f"непарсимых: {result.unparseable_count}"
        )
        return result
