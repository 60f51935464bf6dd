from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and optional canonical group name."""

    def groups(self) -> dict[str, tuple[str, ...]]:
        """Return every canonical group with its full term list (canonical first)."""

    def groups_containing(self, text: str) -> frozenset[str]:
        """Return canonical names of every group with a term present in ``text``."""
