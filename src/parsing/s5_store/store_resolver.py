"""
Store Resolver - Сопоставление строки магазина с реестром.

ЦКП: Канонический идентификатор магазина и его ранг отображения.

Порядок шагов (первое совпадение побеждает):
1. alias             - точный псевдоним ("野木" -> "マルタツ野木")
2. exact             - точный идентификатор
3. containment       - идентификатор содержится в тексте (самый длинный)
4. keyword_rules     - упорядоченные правила {store, any_of, none_of}
5. unique_substring  - текст содержится ровно в одном идентификаторе
                       (отключаемый шаг)

Чистая функция строки и статических таблиц.
"""

import re
from typing import Callable, Iterable, List, Optional, Tuple

from loguru import logger

from src.parsing.domain.exceptions import StoreNotFoundError
from src.parsing.domain.interfaces import IStoreResolver
from src.parsing.rules.rule_models import StoreRules

STORE_LABEL_MARKER = re.compile(r"【[^】]*店舗[^】]*】")
BRACKETS = re.compile(r"[【】]")
WHITESPACE = re.compile(r"\s+")
STORE_LABEL_PREFIX = re.compile(r"^店舗名?[:：]?")
STORE_SUFFIX = re.compile(r"店$")


def substring_candidates(name: str, candidates: Iterable[str]) -> List[str]:
    """Кандидаты, содержащие name (порядок сохраняется, без повторов)."""
    matches = []
    for candidate in candidates:
        if candidate and name in candidate and candidate not in matches:
            matches.append(candidate)
    return matches


def unique_substring_fallback(name: str, candidates: Iterable[str]) -> Optional[str]:
    """
    Единственный кандидат, содержащий name.

    Returns:
        Кандидат или None (совпадений нет или больше одного)
    """
    if not name:
        return None
    matches = substring_candidates(name, candidates)
    return matches[0] if len(matches) == 1 else None


class StoreResolver(IStoreResolver):
    """Резолвер магазинов по таблицам StoreRules."""

    def __init__(self, rules: StoreRules):
        self.rules = rules
        self.known_ids = rules.known_ids
        self.auto_accept_unique_substring = rules.auto_accept_unique_substring

        self._steps: List[Tuple[str, Callable[[str], Optional[str]]]] = [
            ("alias", self.rules.aliases.get),
            ("exact", self._exact),
            ("containment", self._containment),
            ("keyword_rules", self._keyword_rules),
        ]

    def normalize(self, raw_store: str) -> str:
        text = STORE_LABEL_MARKER.sub("", raw_store or "")
        text = BRACKETS.sub("", text)
        text = WHITESPACE.sub("", text)
        text = STORE_LABEL_PREFIX.sub("", text)
        return STORE_SUFFIX.sub("", text)

    def resolve(self, raw_store: str) -> str:
        name = self.normalize(raw_store)
        if not name:
            raise StoreNotFoundError(raw_store, component="StoreResolver")

        for step_name, step in self._steps:
            store_id = step(name)
            if store_id:
                store_id = self._canonical(store_id)
                logger.debug(f"[StoreResolver] '{raw_store}' -> {store_id} ({step_name})")
                return store_id

        candidates = substring_candidates(name, self.known_ids)
        if self.auto_accept_unique_substring:
            store_id = unique_substring_fallback(name, self.known_ids)
            if store_id:
                store_id = self._canonical(store_id)
                logger.info(f"[StoreResolver] '{raw_store}' -> {store_id} (unique_substring)")
                return store_id

        raise StoreNotFoundError(raw_store, component="StoreResolver", candidates=candidates)

    def rank_of(self, store_id: Optional[str]) -> Optional[int]:
        if not store_id:
            return None
        if store_id in self.rules.roster:
            return self.rules.roster.index(store_id)
        for index, roster_id in enumerate(self.rules.roster):
            if roster_id in store_id:
                return index
        return None

    def _canonical(self, store_id: str) -> str:
        # Устаревшие идентификаторы реестра ("晴れパン") -> текущие
        return self.rules.aliases.get(store_id, store_id)

    def _exact(self, name: str) -> Optional[str]:
        return name if name in self.known_ids else None

    def _containment(self, name: str) -> Optional[str]:
        contained = [store_id for store_id in self.known_ids if store_id in name]
        if not contained:
            return None
        # max() оставляет первый из равных по длине
        return max(contained, key=len)

    def _keyword_rules(self, name: str) -> Optional[str]:
        for rule in self.rules.keyword_rules:
            if rule.matches(name):
                return rule.store
        return None
