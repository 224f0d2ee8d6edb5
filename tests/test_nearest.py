import math
import random

import pytest

from ndvi_bloom.exceptions import EmptyDatasetError
from ndvi_bloom.models import Dataset, GeoPoint, LocationRecord
from ndvi_bloom.nearest import nearest_location, planar_distance


def test_nearest_picks_closest_record(dataset):
    assert nearest_location((22.0, 88.0), dataset) is dataset.locations[1]
    assert nearest_location(GeoPoint(13.0, 77.5), dataset) is dataset.locations[2]


def test_planar_distance_is_degree_space():
    assert planar_distance(0.0, 0.0, 3.0, 4.0) == pytest.approx(5.0)
    # no longitude shrinking towards the poles
    assert planar_distance(80.0, 0.0, 80.0, 1.0) == pytest.approx(1.0)


def test_exact_tie_keeps_first_record():
    first = LocationRecord(0.0, 1.0, (0.1,))
    second = LocationRecord(0.0, -1.0, (0.9,))
    dataset = Dataset((first, second))
    assert nearest_location((0.0, 0.0), dataset) is first


def test_duplicate_coordinates_keep_first_record():
    first = LocationRecord(5.0, 5.0, (0.1,))
    second = LocationRecord(5.0, 5.0, (0.9,))
    assert nearest_location((5.0, 5.0), Dataset((first, second))) is first


def test_matches_brute_force_minimum():
    rng = random.Random(7)
    locations = tuple(
        LocationRecord(rng.uniform(-60, 60), rng.uniform(-170, 170), ()) for _ in range(200)
    )
    dataset = Dataset(locations)
    for _ in range(50):
        lat, lon = rng.uniform(-60, 60), rng.uniform(-170, 170)
        expected = min(locations, key=lambda r: math.hypot(lat - r.lat, lon - r.lon))
        assert nearest_location((lat, lon), dataset) is expected


def test_nearest_is_idempotent(dataset):
    point = (18.0, 80.0)
    assert nearest_location(point, dataset) is nearest_location(point, dataset)


def test_empty_dataset_raises():
    with pytest.raises(EmptyDatasetError):
        nearest_location((0.0, 0.0), Dataset())
