import json

import pytest

from ndvi_bloom.models import Dataset, LocationRecord


@pytest.fixture
def payload():
    return {
        "locations": [
            {"lat": 20.0, "lon": 78.0, "ndvi_series": [0.1, 0.2, 0.3]},
            {"lat": 22.5, "lon": 88.3, "ndvi_series": [0.1, 0.7, 0.9]},
            {"lat": 12.9, "lon": 77.6, "ndvi_series": [0.66, 0.1]},
        ]
    }


@pytest.fixture
def data_file(tmp_path, payload):
    path = tmp_path / "ndvi_data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def dataset():
    return Dataset((
        LocationRecord(20.0, 78.0, (0.1, 0.2, 0.3)),
        LocationRecord(22.5, 88.3, (0.1, 0.7, 0.9)),
        LocationRecord(12.9, 77.6, (0.66, 0.1)),
    ))
