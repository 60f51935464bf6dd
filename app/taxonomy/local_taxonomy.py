from __future__ import annotations

import json
from pathlib import Path

from app.normalize.utils import contains_term

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self._groups = self._load_groups(path)
        self._alias_index: dict[str, str] = {}
        for canonical, terms in self._groups.items():
            for term in terms:
                self._alias_index.setdefault(term, canonical)

    @staticmethod
    def _load_groups(path: Path) -> dict[str, tuple[str, ...]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        groups: dict[str, tuple[str, ...]] = {}
        for key, aliases in raw.items():
            canonical = str(key).strip().lower()
            terms = [canonical]
            for alias in aliases or []:
                cleaned = str(alias).strip().lower()
                if cleaned and cleaned not in terms:
                    terms.append(cleaned)
            groups[canonical] = tuple(terms)
        return groups

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = raw.strip().lower()
        return normalized, self._alias_index.get(normalized)

    def groups(self) -> dict[str, tuple[str, ...]]:
        return dict(self._groups)

    def groups_containing(self, text: str) -> frozenset[str]:
        lowered = (text or "").lower()
        return frozenset(
            canonical
            for canonical, terms in self._groups.items()
            if any(contains_term(lowered, term) for term in terms)
        )
