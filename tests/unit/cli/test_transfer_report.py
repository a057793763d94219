"""
Unit-тесты для точки входа scripts/transfer_report.py.
"""

import io

import pytest
from loguru import logger

import config.settings
from scripts.transfer_report import EXIT_BAD_INPUT, EXIT_FAILED, EXIT_OK, main

REPORT = "08:27 a_ki 7月29日(火)\n【店舗】マルタツ野木\n【売上】123456円\n"


@pytest.fixture(autouse=True)
def data_dirs(tmp_path, monkeypatch):
    monkeypatch.setattr(config.settings, "INPUT_DIR", tmp_path / "input")
    monkeypatch.setattr(config.settings, "OUTPUT_DIR", tmp_path / "output")
    yield
    # main() переназначает sink на stderr теста
    logger.remove()


@pytest.fixture
def stdin(monkeypatch):
    stream = io.StringIO(REPORT)
    monkeypatch.setattr("sys.stdin", stream)
    return stream


class TestStdinInput:
    """Текст отчётов из stdin."""

    def test_interactive_mode_rejected(self, stdin, tmp_path):
        code = main(["-", "--ledger", str(tmp_path / "ledger.xlsx")])

        assert code == EXIT_BAD_INPUT
        assert stdin.tell() == 0

    def test_format_only(self, stdin, capsys):
        code = main(["-", "--format-only"])

        assert code == EXIT_OK
        assert "【売上】123,456円" in capsys.readouterr().out


def test_invalid_layout_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config.settings, "FIRST_DATE_COLUMN", 2)
    report = tmp_path / "reports.txt"
    report.write_text(REPORT, encoding="utf-8")

    assert main([str(report), "--format-only"]) == EXIT_FAILED
