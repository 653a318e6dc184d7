"""CSV loader for the static route table.

The table ships with the package (data/routes.csv) and is read once at
start-up. Columns: origin, destination, distance_km.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List

from ...domain.errors import ConfigurationError
from ...domain.models import RouteFact

logger = logging.getLogger(__name__)


def load_routes_csv(path: Path) -> tuple[RouteFact, ...]:
    """Load route facts from a CSV file, keeping file order.

    Rows with a missing city or distance are skipped with a warning.

    Raises:
        ConfigurationError: If the file cannot be read or a row holds an
            invalid distance.
    """
    routes: List[RouteFact] = []

    try:
        with Path(path).open(encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                origin = (row.get("origin") or "").strip()
                destination = (row.get("destination") or "").strip()
                distance_str = (row.get("distance_km") or "").strip()

                if not origin or not destination or not distance_str:
                    logger.warning(
                        "Skipping incomplete route row",
                        extra={"line": line_no, "path": str(path)},
                    )
                    continue

                try:
                    routes.append(
                        RouteFact(
                            origin=origin,
                            destination=destination,
                            distance_km=float(distance_str),
                        )
                    )
                except ValueError as e:
                    raise ConfigurationError(
                        f"Invalid route on line {line_no} of {path}",
                        setting_name="catalog.routes_file",
                        expected_type="positive distance_km",
                        cause=e,
                    )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to load routes from {path}",
            setting_name="catalog.routes_file",
            cause=e,
        )

    logger.info("Routes loaded", extra={"routes": len(routes), "path": str(path)})
    return tuple(routes)
