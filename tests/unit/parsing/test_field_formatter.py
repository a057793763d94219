"""
Unit-тесты для Stage 2: Field Formatting.
"""

import pytest

from src.parsing.s2_formatting import FieldFormatter, group_thousands


@pytest.fixture
def formatter():
    return FieldFormatter()


@pytest.mark.parametrize("line, expected", [
    ("5000", "5,000"),
    ("12345", "12,345"),
    ("123456", "123,456"),
    ("1234567", "1,234,567"),
    ("123", "123"),
    ("12345678", "12345678"),
])
def test_thousands_separators(formatter, line, expected):
    assert formatter.format(line) == expected


@pytest.mark.parametrize("line, expected", [
    ("2,025/4/11", "4月11日"),
    ("2025/04/01", "4月1日"),
    ("2025-7-29", "7月29日"),
    ("2025年07月29日(火)", "7月29日(火)"),
])
def test_dates_rewritten(formatter, line, expected):
    assert formatter.format(line) == expected


def test_number_next_to_japanese_text(formatter):
    """Японские символы рядом с числом - граница слова."""
    assert formatter.format("【売上】123456円") == "【売上】123,456円"


@pytest.mark.parametrize("line, expected", [
    ("P/A6840円", "P/A 6,840円"),
    ("社員5000円", "社員 5,000円"),
    ("P/A    6840円", "P/A 6,840円"),
])
def test_role_spacing(formatter, line, expected):
    assert formatter.format(line) == expected


def test_amount_unit_and_whitespace(formatter):
    assert formatter.format("  【人件費】  P/A　6,840 円 ") == "【人件費】 P/A 6,840円"


def test_timestamp_untouched(formatter):
    assert formatter.format("08:27 a_ki 7月29日(火)") == "08:27 a_ki 7月29日(火)"


@pytest.mark.parametrize("line", [
    "【売上】123,456円",
    "08:27 a_ki 2025/7/29",
    "P/A6840 円",
    "仕入 1234567円  メモ 0123",
    "2,025/4/11 5000",
])
def test_idempotent(formatter, line):
    once = formatter.format(line)
    assert formatter.format(once) == once


def test_group_thousands_keeps_leading_zeros():
    assert group_thousands("0123") == "0,123"
