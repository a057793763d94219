"""
Domain слой домена Parsing.

Содержит модели, интерфейсы и исключения для Parsing домена.
"""

from .interfaces import IStoreResolver, IReportParser

from .models import ItemKind, ItemKey, ReportBlock

from .exceptions import (
    SalesReportError,
    ReportConfigurationError,
    NoInputDataError,
    StoreNotFoundError,
)

__all__ = [
    # Интерфейсы
    "IStoreResolver",
    "IReportParser",

    # Модели
    "ItemKind",
    "ItemKey",
    "ReportBlock",

    # Исключения
    "SalesReportError",
    "ReportConfigurationError",
    "NoInputDataError",
    "StoreNotFoundError",
]
