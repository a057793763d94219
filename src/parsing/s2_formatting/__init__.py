"""
Stage 2: Field Formatting

ЦКП: Нормализованные даты, суммы и роли.
"""

from .field_formatter import FieldFormatter, group_thousands

__all__ = [
    "FieldFormatter",
    "group_thousands",
]
