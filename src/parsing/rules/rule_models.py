"""
DTO для таблиц правил разбора.

Содержит:
- Ключевые слова и паттерны классификации строк
- Порядок строк внутри блока
- Метки статей и их отображение на строки книги учёта
- Реестр магазинов, псевдонимы и правила по ключевым словам

Использует Pydantic для валидации структуры конфигурации.
"""

import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _validate_patterns(patterns: List[str]) -> List[str]:
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Некорректный паттерн '{pattern}': {e}")
    return patterns


class ClassificationRules(BaseModel):
    """Правила классификации строк (Stage 1)."""
    model_config = ConfigDict(frozen=True)

    anchor_patterns: List[str] = Field(..., description="Regex строк-якорей (время сообщения)")
    anchor_keywords: List[str] = Field(default_factory=list, description="Слова-якоря (日付, 日時)")
    exclude_keywords: List[str] = Field(default_factory=list, description="Шумовые слова")
    include_keywords: List[str] = Field(..., description="Слова включаемых строк")

    @field_validator("anchor_patterns")
    @classmethod
    def validate_anchor_patterns(cls, v):
        if not v:
            raise ValueError("anchor_patterns не может быть пустым")
        return _validate_patterns(v)

    @field_validator("include_keywords")
    @classmethod
    def validate_include_keywords(cls, v):
        if not v:
            raise ValueError("include_keywords не может быть пустым")
        return v


class OrderingRules(BaseModel):
    """Порядок строк внутри блока (Stage 4)."""
    model_config = ConfigDict(frozen=True)

    keywords: List[str] = Field(..., description="Приоритет ключевых слов")
    labor_total_keyword: str = Field("人件費", description="Строка общего ФОТ")
    role_amount_pattern: str = Field(..., description="Regex строки роли с суммой")

    @field_validator("role_amount_pattern")
    @classmethod
    def validate_role_amount_pattern(cls, v):
        _validate_patterns([v])
        return v


class ItemRules(BaseModel):
    """Метки статей для сверки с книгой учёта."""
    model_config = ConfigDict(frozen=True)

    checked: List[str] = Field(..., description="Статьи для проверок дубликатов")
    ledger_labels: Dict[str, str] = Field(
        default_factory=dict,
        description="Короткая метка -> метка строки книги учёта"
    )

    def ledger_label(self, label: str) -> str:
        return self.ledger_labels.get(label, label)


class KeywordRule(BaseModel):
    """Правило сопоставления магазина по ключевым словам."""
    model_config = ConfigDict(frozen=True)

    store: str
    any_of: List[str] = Field(..., min_length=1)
    none_of: List[str] = Field(default_factory=list)

    def matches(self, text: str) -> bool:
        if any(word in text for word in self.none_of):
            return False
        return any(word in text for word in self.any_of)


class StoreRules(BaseModel):
    """Реестр магазинов и правила сопоставления (Stage 5)."""
    model_config = ConfigDict(frozen=True)

    roster: List[str] = Field(..., description="Магазины в порядке отображения")
    aliases: Dict[str, str] = Field(default_factory=dict)
    keyword_rules: List[KeywordRule] = Field(default_factory=list)
    auto_accept_unique_substring: bool = True

    @field_validator("roster")
    @classmethod
    def validate_roster(cls, v):
        if not v:
            raise ValueError("roster не может быть пустым")
        duplicates = sorted({store for store in v if v.count(store) > 1})
        if duplicates:
            raise ValueError(f"Повторы в roster: {duplicates}")
        return v

    @model_validator(mode="after")
    def validate_targets(self):
        known = set(self.known_ids)
        unknown = [rule.store for rule in self.keyword_rules if rule.store not in known]
        if unknown:
            raise ValueError(f"keyword_rules ссылаются на неизвестные магазины: {unknown}")
        return self

    @property
    def known_ids(self) -> List[str]:
        """Реестр + цели псевдонимов (без повторов, порядок сохраняется)."""
        ids = list(self.roster)
        for target in self.aliases.values():
            if target not in ids:
                ids.append(target)
        return ids


class ReportConfig(BaseModel):
    """Единая конфигурация разбора и сверки отчётов."""
    model_config = ConfigDict(frozen=True)

    classification: ClassificationRules
    ordering: OrderingRules
    items: ItemRules
    stores: StoreRules
