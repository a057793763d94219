from datetime import date

import pytest

from src.parsing.s3_assembly import DateParser


@pytest.fixture
def parser(today):
    return DateParser(today=today)


def test_chat_anchor_uses_current_year(parser):
    assert parser.parse("08:27 a_ki 7月29日(火)") == date(2025, 7, 29)


def test_explicit_year(parser):
    assert parser.parse("日付: 2024/12/31") == date(2024, 12, 31)
    assert parser.parse("日付: 2024年1月5日") == date(2024, 1, 5)


def test_separated_year(parser):
    assert parser.parse("日付: 2,025/4/11") == date(2025, 4, 11)


def test_weekday_annotation_ignored(parser):
    assert parser.parse("日時 7月1日（月）") == date(2025, 7, 1)


def test_date_right_after_timestamp(parser):
    assert parser.parse("08:27 7月29日 報告") == date(2025, 7, 29)


def test_invalid_calendar_date(parser):
    assert parser.parse("日付: 2月30日") is None


def test_no_date(parser):
    assert parser.parse("08:27 a_ki おはようございます") is None
