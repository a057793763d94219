"""
Настройки проекта Sales Report Ledger.

Раскладка книги учёта и переопределения через переменные окружения.
"""

import os
from datetime import date
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# Книга учёта (xlsx) по умолчанию
LEDGER_PATH = os.getenv(
    "SALES_LEDGER_PATH",
    str(DATA_DIR / "ledger.xlsx")
)

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("SALES_LEDGER_LOG_LEVEL", "INFO")
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

# =============================================================================
# РАСКЛАДКА ЛИСТА ПЕРИОДА
# =============================================================================
# Колонка A: идентификатор магазина, колонка B: статья
STORE_LABEL_COLUMN = 1
ITEM_LABEL_COLUMN = 2

# Строка заголовка с датами
HEADER_ROW = 1

# Диапазон колонок с датами: C..AG
FIRST_DATE_COLUMN = 3
LAST_DATE_COLUMN = 33

# Имя листа периода: "2507月_売上" для июля 2025
LEDGER_SHEET_TEMPLATE = "{period}月_売上"

# Эпоха серийных дат табличных редакторов
SERIAL_DATE_EPOCH = date(1899, 12, 30)

# Форматы строковых дат в заголовке
HEADER_DATE_FORMATS = ["%Y/%m/%d", "%Y-%m-%d", "%Y年%m月%d日", "%Y.%m.%d"]

# =============================================================================
# НАСТРОЙКИ ПАРСИНГА
# =============================================================================
# Дата сортировки для блоков без даты
FAR_FUTURE_DATE = date(3000, 1, 1)

# Автоматически принимать единственное частичное совпадение магазина
AUTO_MATCH_UNIQUE_SUBSTRING = os.getenv(
    "SALES_LEDGER_AUTO_MATCH", "1"
).lower() not in ("0", "false", "no")


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not 1 <= FIRST_DATE_COLUMN <= LAST_DATE_COLUMN:
        errors.append(
            f"Неверный диапазон колонок дат: {FIRST_DATE_COLUMN}..{LAST_DATE_COLUMN}"
        )

    if FIRST_DATE_COLUMN <= max(STORE_LABEL_COLUMN, ITEM_LABEL_COLUMN):
        errors.append("Колонки дат пересекаются с колонками меток")

    if "{period}" not in LEDGER_SHEET_TEMPLATE:
        errors.append(f"LEDGER_SHEET_TEMPLATE без {{period}}: {LEDGER_SHEET_TEMPLATE}")

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директории если не существуют
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    return True
