"""
Unit-тесты для Stage 4: Line Ordering.
"""

import re

import pytest

from src.parsing.s4_line_ordering import LineOrderer


@pytest.fixture
def orderer(report_config):
    timestamp = re.compile(report_config.classification.anchor_patterns[0])
    return LineOrderer(report_config.ordering, timestamp_pattern=timestamp)


def test_keyword_priority(orderer):
    lines = [
        "【仕入】20,000円",
        "【売上】123,456円",
        "【店舗】マルタツ野木",
        "08:27 a_ki 7月29日(火)",
    ]
    assert orderer.order(lines) == [
        "08:27 a_ki 7月29日(火)",
        "【店舗】マルタツ野木",
        "【売上】123,456円",
        "【仕入】20,000円",
    ]


def test_labor_breakdown_follows_labor_total(orderer):
    lines = [
        "08:27 a_ki 7月29日",
        "【人件費】18,840円",
        "社員 12,000円",
        "【売上】100,000円",
        "P/A 6,840円",
    ]
    assert orderer.order(lines) == [
        "08:27 a_ki 7月29日",
        "【売上】100,000円",
        "【人件費】18,840円",
        "社員 12,000円",
        "P/A 6,840円",
    ]


def test_keyword_match_ignores_whitespace(orderer):
    lines = ["売 上 1,000円", "店 舗 野木"]
    assert orderer.order(lines) == ["店 舗 野木", "売 上 1,000円"]


def test_unmatched_lines_keep_original_order(orderer):
    lines = ["【雑費】1,200円", "【売上】1,000円", "【消耗品】800円"]
    assert orderer.order(lines) == ["【売上】1,000円", "【雑費】1,200円", "【消耗品】800円"]


def test_order_is_permutation(orderer):
    lines = ["b", "【売上】1円", "a", "日付 7月1日", "a"]
    assert sorted(orderer.order(lines)) == sorted(lines)


def test_timestamp_anchor_takes_datetime_slot(orderer):
    lines = ["【店舗】野木", "08:27 a_ki 7月29日", "日時 7月29日"]
    assert orderer.order(lines) == ["08:27 a_ki 7月29日", "日時 7月29日", "【店舗】野木"]


def test_without_timestamp_pattern_anchor_is_plain_line(report_config):
    orderer = LineOrderer(report_config.ordering)
    lines = ["08:27 a_ki 7月29日", "【売上】1,000円"]
    assert orderer.order(lines) == ["【売上】1,000円", "08:27 a_ki 7月29日"]
