"""Route ports - Abstraction over the static route catalog.

The catalog answers two questions for the page: which cities are known
(datalist population) and how far apart two of them are (distance
autofill). Lookups abstain with None rather than raising.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence


class RouteCatalogPort(Protocol):
    """Port for city enumeration and distance lookup.

    Implementation: adapters/routes/static_catalog.py
    """

    def list_cities(self) -> Sequence[str]:
        """List every city appearing in a route, once, collation-sorted.

        Returns:
            Sorted sequence of unique city names.
        """
        ...

    def find_distance(self, origin: str, destination: str) -> Optional[float]:
        """Find the distance between two cities, in either direction.

        Args:
            origin: Departure city (case and surrounding spaces ignored).
            destination: Arrival city (case and surrounding spaces ignored).

        Returns:
            Distance in km of the first matching route, or None.
        """
        ...

    def suggest_cities(self, query: str, limit: Optional[int] = None) -> Sequence[str]:
        """Suggest known cities close to a free-form query.

        Args:
            query: City name as typed by the user.
            limit: Maximum number of suggestions.

        Returns:
            Known city names, best match first.
        """
        ...
