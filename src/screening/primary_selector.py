"""Primary target group selection."""

from __future__ import annotations

from typing import Iterable, Optional

from rules.target_groups import Category, RuleCatalog


class PrimarySelector:
    """
    Pick the single highest-value group from a match set.

    Ties on max credit go to the group declared first in the catalog, so the
    result never depends on the order matches were collected in.
    """

    def __init__(self, catalog: RuleCatalog):
        self._catalog = catalog

    def select(self, codes: Iterable[str]) -> Optional[Category]:
        best: Optional[Category] = None
        for code in codes:
            category = self._catalog.lookup(code)
            if category is None:
                continue
            if best is None or self._outranks(category, best):
                best = category
        return best

    def _outranks(self, candidate: Category, current: Category) -> bool:
        if candidate.max_credit != current.max_credit:
            return candidate.max_credit > current.max_credit
        return self._catalog.position(candidate.code) < self._catalog.position(current.code)
