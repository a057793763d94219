"""
Unit-тесты для загрузки таблиц правил.

ЦКП: Валидная конфигурация загружается и кешируется, невалидная -
ReportConfigurationError на этапе загрузки.
"""

import shutil

import pytest
import yaml

from src.parsing.domain.exceptions import ReportConfigurationError
from src.parsing.rules import ConfigLoader
from src.parsing.rules.config_loader import RULES_DIR, RULES_FILE, STORES_FILE


@pytest.fixture(autouse=True)
def clear_cache():
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def rules_dir(tmp_path):
    shutil.copy(RULES_DIR / RULES_FILE, tmp_path / RULES_FILE)
    shutil.copy(RULES_DIR / STORES_FILE, tmp_path / STORES_FILE)
    return tmp_path


def rewrite(path, mutate):
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    mutate(data)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True)


class TestDefaultConfig:
    """Поставляемые таблицы правил."""

    def test_loads(self):
        config = ConfigLoader().load()

        assert config.stores.roster[0] == "マルキン三毳"
        assert "過不足" in config.classification.exclude_keywords
        assert config.items.checked == ["売上", "仕入"]
        assert config.items.ledger_label("売上") == "当日売上"
        assert config.items.ledger_label("仕入費") == "当日仕入費"
        assert config.items.ledger_label("雑費") == "雑費"

    def test_cached(self):
        loader = ConfigLoader()
        assert loader.load() is loader.load()

    def test_override_does_not_touch_cache(self):
        loader = ConfigLoader()
        overridden = loader.load(auto_accept_unique_substring=False)

        assert overridden.stores.auto_accept_unique_substring is False
        assert loader.load().stores.auto_accept_unique_substring is True

    def test_known_ids_include_alias_targets(self):
        config = ConfigLoader().load()
        assert "クロリ小山" in config.stores.known_ids
        assert "クロリ小山" not in config.stores.roster


class TestInvalidConfig:
    """Ошибки конфигурации."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportConfigurationError):
            ConfigLoader(tmp_path).load()

    def test_rule_targets_unknown_store(self, rules_dir):
        rewrite(
            rules_dir / STORES_FILE,
            lambda data: data["keyword_rules"].append({"store": "東京本店", "any_of": ["東京"]}),
        )
        with pytest.raises(ReportConfigurationError):
            ConfigLoader(rules_dir).load()

    def test_duplicate_roster(self, rules_dir):
        rewrite(rules_dir / STORES_FILE, lambda data: data["roster"].append("マルキン三毳"))
        with pytest.raises(ReportConfigurationError):
            ConfigLoader(rules_dir).load()

    def test_bad_anchor_pattern(self, rules_dir):
        rewrite(
            rules_dir / RULES_FILE,
            lambda data: data["classification"].update(anchor_patterns=["(unclosed"]),
        )
        with pytest.raises(ReportConfigurationError):
            ConfigLoader(rules_dir).load()

    def test_broken_yaml(self, rules_dir):
        (rules_dir / STORES_FILE).write_text("roster: [unclosed", encoding="utf-8")
        with pytest.raises(ReportConfigurationError):
            ConfigLoader(rules_dir).load()
