"""
Config Loader для таблиц правил разбора.

ЦКП: Загрузка единой модели ReportConfig из YAML файлов.

Архитектурный принцип:
- ReportConfig = report_rules.yaml + stores.yaml
- Загрузка и валидация один раз, дальше - кеш
- Конфиг передаётся этапам через конструктор, глобального состояния нет
"""

from pathlib import Path
from typing import ClassVar, Dict, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from src.parsing.domain.exceptions import ReportConfigurationError
from src.parsing.rules.rule_models import ReportConfig

RULES_DIR = Path(__file__).parent
RULES_FILE = "report_rules.yaml"
STORES_FILE = "stores.yaml"


class ConfigLoader:
    """
    Загрузчик конфигурации разбора.

    Кеширует ReportConfig по директории правил.
    """

    _cache: ClassVar[Dict[str, ReportConfig]] = {}

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else RULES_DIR

    def load(self, auto_accept_unique_substring: Optional[bool] = None) -> ReportConfig:
        """
        Загружает (или берёт из кеша) конфигурацию.

        Args:
            auto_accept_unique_substring: Переопределение флага fallback-шага
                сопоставления магазинов (None - как в stores.yaml)

        Returns:
            ReportConfig

        Raises:
            ReportConfigurationError: файл не найден или не прошёл валидацию
        """
        cache_key = str(self.config_dir.resolve())
        config = self._cache.get(cache_key)

        if config is None:
            config = self._load_from_dir(self.config_dir)
            self._cache[cache_key] = config
            logger.debug(
                f"[ConfigLoader] Загружен ReportConfig из {self.config_dir}: "
                f"{len(config.stores.roster)} магазинов, "
                f"{len(config.classification.exclude_keywords)} exclude_keywords"
            )

        if auto_accept_unique_substring is not None and (
            auto_accept_unique_substring != config.stores.auto_accept_unique_substring
        ):
            stores = config.stores.model_copy(
                update={"auto_accept_unique_substring": auto_accept_unique_substring}
            )
            config = config.model_copy(update={"stores": stores})

        return config

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()

    @staticmethod
    def _read_yaml(path: Path) -> dict:
        if not path.exists():
            raise ReportConfigurationError(
                f"Файл правил не найден: {path}", component="ConfigLoader"
            )
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ReportConfigurationError(
                f"Некорректный YAML: {path}", component="ConfigLoader", original_error=e
            )

    @classmethod
    def _load_from_dir(cls, config_dir: Path) -> ReportConfig:
        rules = cls._read_yaml(config_dir / RULES_FILE)
        stores = cls._read_yaml(config_dir / STORES_FILE)

        try:
            return ReportConfig(
                classification=rules.get("classification", {}),
                ordering=rules.get("ordering", {}),
                items=rules.get("items", {}),
                stores=stores,
            )
        except ValidationError as e:
            raise ReportConfigurationError(
                f"Конфигурация в {config_dir} не прошла валидацию",
                component="ConfigLoader",
                original_error=e,
            )
