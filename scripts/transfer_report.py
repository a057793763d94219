#!/usr/bin/env python3
"""
Точка входа: перенос суточных отчётов из чата в книгу учёта.

Использование:
    # Только текст для проверки (книга учёта не трогается)
    python scripts/transfer_report.py reports.txt --format-only

    # Интерактивный перенос (подтверждения в консоли)
    python scripts/transfer_report.py reports.txt --ledger data/ledger.xlsx

    # Пакетный перенос (перезапись без вопросов)
    python scripts/transfer_report.py reports.txt --ledger data/ledger.xlsx --batch

    # Текст из stdin
    cat reports.txt | python scripts/transfer_report.py - --format-only
    cat reports.txt | python scripts/transfer_report.py - --ledger data/ledger.xlsx --batch
"""

import sys
import argparse
from pathlib import Path

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from loguru import logger

from config.settings import (
    AUTO_MATCH_UNIQUE_SUBSTRING,
    LEDGER_PATH,
    LOG_FORMAT,
    LOG_LEVEL,
    validate_config,
)
from src.ledger.infrastructure import WorkbookLedgerBook
from src.ledger.s8_reconciliation import AutoOverwritePolicy, PromptOperatorPolicy
from src.parsing.domain.exceptions import NoInputDataError, SalesReportError
from src.pipeline import SalesReportPipeline

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def setup_logging(level: str) -> None:
    # stdout занят текстом для проверки
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    """Главная функция переноса."""
    parser = argparse.ArgumentParser(description="Sales Report Ledger: перенос отчётов в книгу учёта")
    parser.add_argument("input", help="Файл с текстом отчётов ('-' для stdin)")
    parser.add_argument("--ledger", default=LEDGER_PATH, help="Путь к книге учёта (.xlsx)")
    parser.add_argument("--batch", action="store_true", help="Пакетный режим: без вопросов, с перезаписью")
    parser.add_argument("--format-only", action="store_true", help="Только вывести текст для проверки")
    parser.add_argument("--output", help="Записать текст для проверки в файл")
    parser.add_argument(
        "--no-auto-match",
        action="store_true",
        help="Не принимать единственное частичное совпадение магазина",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Уровень логирования")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    # Проверяем конфигурацию
    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_FAILED

    # Вопросы оператору читаются из stdin: он не может быть и входом
    if args.input == "-" and not (args.batch or args.format_only):
        print("[ERROR] Текст из stdin: используйте --batch или --format-only", file=sys.stderr)
        return EXIT_BAD_INPUT

    auto_match = AUTO_MATCH_UNIQUE_SUBSTRING and not args.no_auto_match
    policy = AutoOverwritePolicy() if args.batch else PromptOperatorPolicy()
    pipeline = SalesReportPipeline(policy=policy, auto_accept_unique_substring=auto_match)

    try:
        text = read_input(args.input)
    except OSError as e:
        print(f"[ERROR] Не удалось прочитать {args.input}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        if args.format_only:
            review_text = pipeline.format_only(text)
            if args.output:
                Path(args.output).write_text(review_text + "\n", encoding="utf-8")
                print(f"[SAVED] Текст для проверки: {args.output}", file=sys.stderr)
            else:
                print(review_text)
            return EXIT_OK

        book = WorkbookLedgerBook(args.ledger)
        parsed, result = pipeline.transfer(text, book)
    except NoInputDataError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except SalesReportError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_FAILED

    if args.output:
        Path(args.output).write_text(parsed.review_text() + "\n", encoding="utf-8")

    print("\n" + "=" * 60, file=sys.stderr)
    print(f"  ИТОГИ: перенесено {result.processed}, ошибок {result.errors}", file=sys.stderr)
    print(f"  Пропущено: {result.skipped}, отброшено при разборе: {result.discarded}", file=sys.stderr)
    print(f"  Записано ячеек: {len(result.writes)}", file=sys.stderr)
    for failure in result.failures:
        print(f"  [ERROR] {failure}", file=sys.stderr)

    if result.aborted:
        print(f"  [ABORTED] {result.abort_reason}", file=sys.stderr)
        return EXIT_FAILED
    if result.errors:
        print(f"  [WARNING] {result.errors} блоков не перенесено", file=sys.stderr)
        return EXIT_FAILED

    print("  [SUCCESS] Все блоки перенесены", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
