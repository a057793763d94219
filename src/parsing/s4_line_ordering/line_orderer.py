"""
Line Orderer - Порядок строк внутри блока.

ЦКП: Строки блока в каноническом порядке ключевых слов,
разбивка ФОТ (P/A, 社員) сразу после строки 人件費.
"""

import re
from typing import List, Optional, Pattern

from src.parsing.rules.rule_models import OrderingRules

WHITESPACE = re.compile(r"\s+")
TIMESTAMP_SLOT = "日時"


class LineOrderer:
    """
    Упорядочивает строки блока.

    1. Для каждого ключевого слова - все неразмещённые строки с ним
       (без учёта пробелов), в исходном порядке. Якорь со временем
       занимает слот 日時.
    2. После строки 人件費 сразу идёт следующая исходная строка,
       если это строка роли с суммой.
    3. Оставшиеся строки ролей с суммой, затем все прочие.
    """

    def __init__(self, rules: OrderingRules, timestamp_pattern: Optional[Pattern] = None):
        self.keywords = list(rules.keywords)
        self.labor_total_keyword = rules.labor_total_keyword
        self.role_amount = re.compile(rules.role_amount_pattern)
        self.timestamp_pattern = timestamp_pattern

    def order(self, lines: List[str]) -> List[str]:
        placed = [False] * len(lines)
        ordered: List[str] = []

        def place(index: int) -> None:
            placed[index] = True
            ordered.append(lines[index])

        for keyword in self.keywords:
            for index, line in enumerate(lines):
                if placed[index] or not self._matches(keyword, line):
                    continue
                place(index)

                following = index + 1
                if (
                    keyword == self.labor_total_keyword
                    and following < len(lines)
                    and not placed[following]
                    and self.role_amount.search(lines[following])
                ):
                    place(following)

        for index, line in enumerate(lines):
            if not placed[index] and self.role_amount.search(line):
                place(index)

        for index in range(len(lines)):
            if not placed[index]:
                place(index)

        return ordered

    def _matches(self, keyword: str, line: str) -> bool:
        if keyword in WHITESPACE.sub("", line):
            return True
        return (
            keyword == TIMESTAMP_SLOT
            and self.timestamp_pattern is not None
            and bool(self.timestamp_pattern.search(line))
        )
