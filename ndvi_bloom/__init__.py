"""
NDVI Bloom Explorer

Overlays simulated NDVI sample points on a map, finds the sample nearest to a
click and predicts the step at which its NDVI first crosses the bloom
threshold.

Quick Start:
    from ndvi_bloom import DatasetStore, nearest_location, predict_bloom

    store = DatasetStore("data/ndvi_data.json")
    dataset = store.load().result()
    record = nearest_location((20.5, 78.9), dataset)
    print(predict_bloom(record.ndvi_series))
"""

__version__ = "0.1.0"

from .bloom import BloomPrediction, bloom_table, predict_bloom
from .exceptions import EmptyDatasetError, LoadError, NDVIBloomError
from .models import Dataset, GeoPoint, LocationRecord, parse_dataset
from .nearest import nearest_location, planar_distance
from .presenter import BloomPresenter, ClickResult
from .store import NOT_READY, DatasetStore, NotReady, StoreState

__all__ = [
    "BloomPrediction",
    "BloomPresenter",
    "ClickResult",
    "Dataset",
    "DatasetStore",
    "EmptyDatasetError",
    "GeoPoint",
    "LoadError",
    "LocationRecord",
    "NDVIBloomError",
    "NOT_READY",
    "NotReady",
    "StoreState",
    "bloom_table",
    "nearest_location",
    "parse_dataset",
    "planar_distance",
    "predict_bloom",
]
