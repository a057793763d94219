"""
Field Formatter - Нормализация полей строки отчёта.

ЦКП: Единый вид дат, сумм и ролей. Форматирование идемпотентно:
format(format(x)) == format(x).

Порядок шагов:
1. Удаление разделителей тысяч между цифрами ("2,025" -> "2025")
2. Даты с годом -> "M月D日"
3. Ровно один пробел между ролью (P/A, 社員) и суммой
4. Разделители тысяч для чисел из 4-7 цифр
5. "6,840 円" -> "6,840円", схлопывание пробелов
"""

import re

DIGIT_COMMA = re.compile(r"(?<=\d),(?=\d)")
DATE_KANJI = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日")
DATE_NUMERIC = re.compile(r"(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})")
ROLE_AMOUNT = re.compile(r"(P/A|社員)\s*(\d)")
# ASCII-границы: японские символы рядом с числом считаются границей
BARE_NUMBER = re.compile(r"\b\d{4,7}\b", re.ASCII)
AMOUNT_UNIT = re.compile(r"([0-9,]+)\s+円")
WHITESPACE = re.compile(r"\s+")


def group_thousands(digits: str) -> str:
    """
    Вставляет разделители тысяч, сохраняя ведущие нули.

    >>> group_thousands("1234567")
    '1,234,567'
    """
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return ",".join(groups)


def _month_day(match: re.Match) -> str:
    return f"{int(match.group(2))}月{int(match.group(3))}日"


class FieldFormatter:
    """Форматтер полей строки отчёта (Stage 2)."""

    def format(self, line: str) -> str:
        text = DIGIT_COMMA.sub("", line)
        text = self.convert_dates(text)
        text = ROLE_AMOUNT.sub(r"\1 \2", text)
        text = BARE_NUMBER.sub(lambda m: group_thousands(m.group(0)), text)
        text = AMOUNT_UNIT.sub(r"\1円", text)
        return WHITESPACE.sub(" ", text).strip()

    @staticmethod
    def convert_dates(text: str) -> str:
        """Переписывает YYYY/M/D, YYYY-M-D, YYYY年M月D日 в M月D日."""
        text = DATE_KANJI.sub(_month_day, text)
        return DATE_NUMERIC.sub(_month_day, text)
