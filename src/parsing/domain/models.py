"""
Модели домена Parsing.

ЦКП: Типизированный блок отчёта (магазин + дата + статьи).
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class ItemKind(Enum):
    """Вид статьи отчёта."""
    REVENUE = "売上"
    PURCHASE = "仕入"
    LABOR_TOTAL = "人件費"
    LABOR_PART_TIME = "P/A"
    LABOR_FULL_TIME = "社員"
    OTHER = "other"


@dataclass(frozen=True)
class ItemKey:
    """
    Ключ статьи в блоке.

    Для фиксированных видов label совпадает с каноническим коротким
    ярлыком (売上, 仕入, ...). Для OTHER это произвольный текст метки.
    """
    kind: ItemKind
    label: str

    @classmethod
    def of(cls, kind: ItemKind) -> "ItemKey":
        if kind is ItemKind.OTHER:
            raise ValueError("Для OTHER нужна явная метка: ItemKey.other(label)")
        return cls(kind=kind, label=kind.value)

    @classmethod
    def other(cls, label: str) -> "ItemKey":
        return cls(kind=ItemKind.OTHER, label=label)

    def __str__(self) -> str:
        return self.label


@dataclass
class ReportBlock:
    """
    Один суточный отчёт одного магазина.

    Пригоден к выводу и записи только если известны магазин и дата
    и есть хотя бы одна статья.
    """
    raw_store: str = ""
    date: Optional[date] = None
    items: Dict[ItemKey, int] = field(default_factory=dict)
    lines: List[str] = field(default_factory=list)
    ordered_lines: List[str] = field(default_factory=list)
    canonical_store: Optional[str] = None
    store_rank: Optional[int] = None

    @property
    def has_store(self) -> bool:
        return bool(self.raw_store)

    @property
    def is_valid(self) -> bool:
        return self.has_store and self.date is not None and bool(self.items)

    @property
    def store_label(self) -> str:
        return self.canonical_store or self.raw_store

    def add_item(self, key: ItemKey, amount: int) -> None:
        # Повтор ключа в блоке: побеждает последнее значение
        self.items[key] = amount

    def to_dict(self) -> dict:
        return {
            "raw_store": self.raw_store,
            "canonical_store": self.canonical_store,
            "store_rank": self.store_rank,
            "date": self.date.isoformat() if self.date else None,
            "items": {key.label: amount for key, amount in self.items.items()},
            "lines": self.ordered_lines or self.lines,
        }
