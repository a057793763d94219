"""
Date Parser - Дата отчёта из строки-якоря.

ЦКП: datetime.date или None (дата не распознана / не существует).
"""

import re
from datetime import date
from typing import Callable, Optional

from loguru import logger

DIGIT_COMMA = re.compile(r"(?<=\d),(?=\d)")
TIMESTAMP_PREFIX = re.compile(r"^\d{2}:\d{2}\s+")
USERNAME_PREFIX = re.compile(r"^(\S+)\s+")
PARENTHESIZED = re.compile(r"[(（][^)）]*[)）]")
FULL_DATE = re.compile(r"(\d{4})[/\-年](\d{1,2})[/\-月]?(\d{1,2})日?")
MONTH_DAY = re.compile(r"(\d{1,2})月\s*(\d{1,2})日?")
DATE_HINT = re.compile(r"\d+[/\-月年]")


class DateParser:
    """
    Парсер даты отчёта.

    Формат якоря из чата: "08:27 a_ki 7月29日(火)". Время и имя
    пользователя отбрасываются, аннотации в скобках тоже.
    Без года используется текущий год (часы инжектируются для тестов).
    """

    def __init__(self, today: Callable[[], date] = date.today):
        self._today = today

    def parse(self, line: str) -> Optional[date]:
        text = self._strip_prefix(DIGIT_COMMA.sub("", line.strip()))
        text = PARENTHESIZED.sub("", text)

        match = FULL_DATE.search(text)
        if match:
            year, month, day = (int(g) for g in match.groups())
            return self._make_date(year, month, day, line)

        match = MONTH_DAY.search(text)
        if match:
            month, day = (int(g) for g in match.groups())
            return self._make_date(self._today().year, month, day, line)

        return None

    @staticmethod
    def _strip_prefix(text: str) -> str:
        stamped = TIMESTAMP_PREFIX.match(text)
        if not stamped:
            return text
        text = text[stamped.end():]

        # Имя пользователя после времени, если это не сама дата
        user = USERNAME_PREFIX.match(text)
        if user and not DATE_HINT.search(user.group(1)):
            text = text[user.end():]
        return text

    @staticmethod
    def _make_date(year: int, month: int, day: int, line: str) -> Optional[date]:
        try:
            return date(year, month, day)
        except ValueError:
            logger.warning(f"[DateParser] Несуществующая дата {year}-{month}-{day}: '{line}'")
            return None
