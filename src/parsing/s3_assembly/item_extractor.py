"""
Item Extractor - Извлечение (статья, сумма) из строки отчёта.

ЦКП: ItemKey + сумма в целых иенах.

Два диалекта строк:
- с метками в скобках: "【売上】123,456円", "【人件費】P/A 6,840円"
- с голыми ключевыми словами: "売上 123,456円", "社員 5,000円"

Метка в скобках > ключевое слово > текст перед числом.
Роль (P/A, 社員) важнее общей метки 人件費.
"""

import re
from typing import Callable, List, Optional, Tuple

from loguru import logger

from src.parsing.domain.models import ItemKey, ItemKind

AMOUNT = re.compile(r"([0-9,]+)\s*円")
BRACKET_LABEL = re.compile(r"【([^】]+)】")
FIRST_NUMBER = re.compile(r"\d")
LABEL_TRAILER = re.compile(r"[\s:：]+$")

ItemRule = Tuple[Callable[[str], bool], ItemKind]


def _has(*words: str) -> Callable[[str], bool]:
    return lambda text: all(word in text for word in words)


def _has_any(*words: str) -> Callable[[str], bool]:
    return lambda text: any(word in text for word in words)


ITEM_RULES: List[ItemRule] = [
    # Метки в скобках
    (_has("【売上】"), ItemKind.REVENUE),
    (_has("【人件費】", "P/A"), ItemKind.LABOR_PART_TIME),
    (_has("【人件費】", "社員"), ItemKind.LABOR_FULL_TIME),
    (_has("【人件費】"), ItemKind.LABOR_TOTAL),
    (_has_any("【仕入費】", "【仕入】"), ItemKind.PURCHASE),
    # Голые ключевые слова
    (_has("売上"), ItemKind.REVENUE),
    (_has("P/A"), ItemKind.LABOR_PART_TIME),
    (_has("社員"), ItemKind.LABOR_FULL_TIME),
    (_has("人件費"), ItemKind.LABOR_TOTAL),
    (_has("仕入"), ItemKind.PURCHASE),
]


class ItemExtractor:
    """Извлекает одну статью из строки (первая сумма с 円)."""

    def __init__(self, rules: List[ItemRule] = None):
        self.rules = rules or ITEM_RULES

    def extract(self, line: str) -> Optional[Tuple[ItemKey, int]]:
        """
        Args:
            line: Отформатированная строка

        Returns:
            (ItemKey, сумма) или None если в строке нет суммы с 円
        """
        match = AMOUNT.search(line)
        if not match:
            return None

        digits = match.group(1).replace(",", "")
        if not digits:
            return None
        amount = int(digits)

        key = self.resolve_key(line)
        if key is None:
            logger.debug(f"[ItemExtractor] Сумма без метки: '{line}'")
            return None
        return key, amount

    def resolve_key(self, line: str) -> Optional[ItemKey]:
        for predicate, kind in self.rules:
            if predicate(line):
                return ItemKey.of(kind)

        bracket = BRACKET_LABEL.search(line)
        if bracket:
            return ItemKey.other(bracket.group(1).strip())

        number = FIRST_NUMBER.search(line)
        label = line[:number.start()] if number else line
        label = LABEL_TRAILER.sub("", label).strip()
        return ItemKey.other(label) if label else None
