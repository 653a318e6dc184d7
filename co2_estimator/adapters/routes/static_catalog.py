"""Static route catalog adapter.

Holds a fixed, ordered list of route facts and answers:
- City enumeration, sorted with Portuguese collation
- Bidirectional, case-insensitive distance lookup (first match wins)
- Fuzzy "did you mean" suggestions for unknown cities
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from rapidfuzz import fuzz, process

from ...domain.models import RouteFact


def normalize_city(name: Any) -> str:
    """Normalize a city for equality: trimmed and lowercased."""
    if not isinstance(name, str):
        return ""
    return name.strip().lower()


def strip_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")


def collation_key(city: str) -> tuple[str, str, str]:
    """Sort key approximating pt-BR collation.

    Accents and case are ignored at the first level, so "Ábaco" sorts
    next to "Abacate" and not after "Z". Accents, then case, break ties,
    lowercase before uppercase.
    """
    return (strip_accents(city).casefold(), city.casefold(), city.swapcase())


def _canonicalize(text: str) -> str:
    """Accent-free, lowercased form used for fuzzy matching."""
    return " ".join(strip_accents(text).lower().replace(",", " ").split())


@dataclass
class StaticRouteCatalog:
    """Route catalog over an immutable, ordered list of route facts.

    This adapter implements RouteCatalogPort. Duplicate or conflicting
    facts for the same city pair are kept: the first one in list order
    is the one returned by find_distance.

    Attributes:
        routes: Route facts in lookup order
        suggestion_limit: Default number of suggestions
        suggestion_score_cutoff: Minimum similarity (0-100) for a suggestion
    """

    routes: Sequence[RouteFact]
    suggestion_limit: int = 5
    suggestion_score_cutoff: float = 70.0

    _cities: Optional[tuple[str, ...]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.routes = tuple(self.routes)

    def list_cities(self) -> tuple[str, ...]:
        """Every city appearing as origin or destination, once, sorted."""
        if self._cities is None:
            unique = {city for r in self.routes for city in (r.origin, r.destination)}
            self._cities = tuple(sorted(unique, key=collation_key))
        return self._cities

    def find_distance(self, origin: Any, destination: Any) -> Optional[float]:
        """Distance between two cities in either direction, or None.

        Both inputs are trimmed and lowercased before comparison. An input
        that normalizes to empty never matches.
        """
        o = normalize_city(origin)
        d = normalize_city(destination)
        if not o or not d:
            return None

        for route in self.routes:
            ro = normalize_city(route.origin)
            rd = normalize_city(route.destination)
            if (ro == o and rd == d) or (ro == d and rd == o):
                return route.distance_km

        return None

    def is_known_city(self, name: Any) -> bool:
        key = normalize_city(name)
        return bool(key) and any(normalize_city(c) == key for c in self.list_cities())

    def suggest_cities(self, query: Any, limit: Optional[int] = None) -> tuple[str, ...]:
        """Known cities closest to query, best match first.

        Matching ignores accents, case and punctuation, so "sao paulo"
        suggests "São Paulo, SP". Returns an empty tuple for an empty query.
        """
        if not isinstance(query, str) or not query.strip():
            return ()

        cities = self.list_cities()
        if not cities:
            return ()

        matches = process.extract(
            _canonicalize(query),
            [_canonicalize(city) for city in cities],
            scorer=fuzz.WRatio,
            limit=limit if limit is not None else self.suggestion_limit,
            score_cutoff=self.suggestion_score_cutoff,
        )
        return tuple(cities[index] for _, _, index in matches)
