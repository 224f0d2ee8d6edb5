"""Data model for simulated NDVI locations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, NamedTuple, Tuple

import pandas as pd

from .exceptions import LoadError

logger = logging.getLogger(__name__)


class GeoPoint(NamedTuple):
    lat: float
    lon: float


@dataclass(frozen=True)
class LocationRecord:
    """One simulated sample point and its NDVI time series."""

    lat: float
    lon: float
    ndvi_series: Tuple[float, ...] = ()

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)

    @property
    def peak_ndvi(self) -> float:
        return max(self.ndvi_series) if self.ndvi_series else float("nan")


@dataclass(frozen=True)
class Dataset:
    locations: Tuple[LocationRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.locations)

    def __iter__(self):
        return iter(self.locations)

    def to_frame(self) -> pd.DataFrame:
        """One row per location: lat, lon, number of steps, peak NDVI"""
        return pd.DataFrame(
            {
                "lat": [loc.lat for loc in self.locations],
                "lon": [loc.lon for loc in self.locations],
                "steps": [len(loc.ndvi_series) for loc in self.locations],
                "peak_ndvi": [loc.peak_ndvi for loc in self.locations],
            },
            columns=["lat", "lon", "steps", "peak_ndvi"],
        )


# ============================================================================
# PAYLOAD PARSING
# ============================================================================
def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _parse_location(index: int, raw: Any) -> LocationRecord:
    if not isinstance(raw, dict):
        raise LoadError(f"Location #{index} is not an object")

    for key in ("lat", "lon"):
        if not _is_number(raw.get(key)):
            raise LoadError(f"Location #{index} has no numeric '{key}'")

    series = raw.get("ndvi_series")
    if not isinstance(series, list):
        raise LoadError(f"Location #{index} has no 'ndvi_series' list")
    if not all(_is_number(v) for v in series):
        raise LoadError(f"Location #{index} has non-numeric NDVI values")

    try:
        lat, lon = float(raw["lat"]), float(raw["lon"])
        values = tuple(float(v) for v in series)
    except (OverflowError, ValueError) as e:
        raise LoadError(f"Location #{index} has an unrepresentable number: {e}") from e

    if any(v < 0.0 or v > 1.0 for v in values):
        logger.warning("Location #%d has NDVI values outside [0, 1]", index)

    return LocationRecord(lat=lat, lon=lon, ndvi_series=values)


def parse_dataset(payload: Any) -> Dataset:
    """Build a Dataset from the decoded JSON payload.

    Expected shape::

        {"locations": [{"lat": 20.1, "lon": 78.2, "ndvi_series": [0.3, 0.4]}, ...]}

    Raises:
        LoadError: if the payload does not have that shape.
    """
    if not isinstance(payload, dict):
        raise LoadError("NDVI payload must be a JSON object")

    locations = payload.get("locations")
    if not isinstance(locations, list):
        raise LoadError("NDVI payload has no 'locations' list")

    return Dataset(tuple(_parse_location(i, raw) for i, raw in enumerate(locations)))
