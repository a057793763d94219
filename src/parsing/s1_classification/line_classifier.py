"""
Line Classifier - Классификация строк отчёта.

ЦКП: Тип строки (якорь / шум / включаемая / пустая / непарсимая).

SRP: Только классификация, без форматирования и извлечения статей.
Правила - упорядоченная таблица (предикат, тип): первое совпадение побеждает.
"""

import re
from enum import Enum
from typing import Callable, List, Tuple

from loguru import logger

from src.parsing.rules.rule_models import ClassificationRules


class LineType(Enum):
    """Тип строки отчёта."""
    BLANK = "blank"
    ANCHOR = "anchor"
    EXCLUDED = "excluded"
    INCLUDABLE = "includable"
    UNPARSEABLE = "unparseable"


Rule = Tuple[Callable[[str], bool], LineType]


class LineClassifier:
    """
    Классификатор строк отчёта.

    Приоритет: пустая > якорь > шум > включаемая > непарсимая.
    Шум проверяется раньше включения: "小山売上" содержит "売上",
    но остаётся шумом.
    """

    def __init__(self, rules: ClassificationRules):
        self._anchor_patterns = [re.compile(p) for p in rules.anchor_patterns]
        self._anchor_keywords = list(rules.anchor_keywords)
        self._exclude_keywords = list(rules.exclude_keywords)
        self._include_keywords = list(rules.include_keywords)

        self._rules: List[Rule] = [
            (lambda text: not text, LineType.BLANK),
            (self.is_anchor, LineType.ANCHOR),
            (lambda text: self._contains_any(text, self._exclude_keywords), LineType.EXCLUDED),
            (lambda text: self._contains_any(text, self._include_keywords), LineType.INCLUDABLE),
        ]

    def classify(self, line: str) -> LineType:
        """
        Классифицирует одну строку.

        Args:
            line: Строка (обрезается по краям)

        Returns:
            LineType
        """
        text = line.strip()
        for predicate, line_type in self._rules:
            if predicate(text):
                return line_type

        logger.debug(f"[LineClassifier] Непарсимая строка: '{text}'")
        return LineType.UNPARSEABLE

    def is_anchor(self, text: str) -> bool:
        if any(pattern.search(text) for pattern in self._anchor_patterns):
            return True
        return self._contains_any(text, self._anchor_keywords)

    def is_timestamp_anchor(self, text: str) -> bool:
        """Якорь вида "08:27 user ..." (начало сообщения в чате)."""
        return any(pattern.search(text.strip()) for pattern in self._anchor_patterns)

    @staticmethod
    def _contains_any(text: str, keywords: List[str]) -> bool:
        return any(keyword in text for keyword in keywords)
