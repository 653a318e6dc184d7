"""Route adapters - Implementations of RouteCatalogPort.

Available implementations:
- StaticRouteCatalog: In-memory catalog over a fixed list of route facts
- load_routes_csv: Reads the packaged route table
"""

from .csv_loader import load_routes_csv
from .static_catalog import StaticRouteCatalog, collation_key, normalize_city

__all__ = ["StaticRouteCatalog", "load_routes_csv", "collation_key", "normalize_city"]
