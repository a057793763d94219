"""
Таблицы правил разбора отчётов (YAML + Pydantic).
"""

from .config_loader import ConfigLoader
from .rule_models import (
    ReportConfig,
    ClassificationRules,
    OrderingRules,
    ItemRules,
    StoreRules,
    KeywordRule,
)

__all__ = [
    "ConfigLoader",
    "ReportConfig",
    "ClassificationRules",
    "OrderingRules",
    "ItemRules",
    "StoreRules",
    "KeywordRule",
]
