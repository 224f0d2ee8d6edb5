"""Nearest sample location to a clicked map point."""
from __future__ import annotations

import math
from typing import Tuple

from .exceptions import EmptyDatasetError
from .models import Dataset, LocationRecord


def planar_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Euclidean distance in raw degree space (not geodesic)"""
    return math.hypot(lat1 - lat2, lon1 - lon2)


def nearest_location(point: Tuple[float, float], dataset: Dataset) -> LocationRecord:
    """Return the location closest to ``point`` = (lat, lon).

    Distances are planar in (lat, lon) degrees. On exact ties the earliest
    location wins.

    Raises:
        EmptyDatasetError: if the dataset has no locations.
    """
    if not dataset.locations:
        raise EmptyDatasetError("Cannot look up a location in an empty dataset")

    lat, lon = point
    best = dataset.locations[0]
    best_dist = planar_distance(lat, lon, best.lat, best.lon)
    for loc in dataset.locations:
        dist = planar_distance(lat, lon, loc.lat, loc.lon)
        if dist < best_dist:
            best = loc
            best_dist = dist
    return best
