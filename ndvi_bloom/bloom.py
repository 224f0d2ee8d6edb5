"""Naive bloom prediction from an NDVI series."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .config import BLOOM_THRESHOLD
from .models import Dataset


@dataclass(frozen=True)
class BloomPrediction:
    step: Optional[int]  # 1-based bloom step, None when no crossing
    threshold: float = BLOOM_THRESHOLD

    @property
    def bloomed(self) -> bool:
        return self.step is not None

    @property
    def message(self) -> str:
        if self.step is None:
            return "no bloom predicted"
        return f"bloom predicted in {self.step} steps"

    @property
    def label(self) -> str:
        """Display text for the popup and panel"""
        if self.step is None:
            return "🍂 No bloom predicted"
        return f"🌸 Bloom predicted in {self.step} steps"

    def __str__(self) -> str:
        return self.message


def first_crossing(series: Sequence[float], threshold: float = BLOOM_THRESHOLD) -> Optional[int]:
    """0-based index of the first value strictly above threshold, or None"""
    values = np.asarray(series, dtype=float)
    if values.size == 0:
        return None
    above = np.flatnonzero(values > threshold)
    return int(above[0]) if above.size else None


def predict_bloom(series: Sequence[float], threshold: float = BLOOM_THRESHOLD) -> BloomPrediction:
    """Predict the bloom step: first time step whose NDVI exceeds threshold.

    An empty series, or one that never exceeds the threshold, yields
    "no bloom predicted".
    """
    index = first_crossing(series, threshold)
    return BloomPrediction(step=None if index is None else index + 1, threshold=threshold)


def bloom_table(dataset: Dataset, threshold: float = BLOOM_THRESHOLD) -> pd.DataFrame:
    """Dataset summary with the bloom prediction of every location"""
    df = dataset.to_frame()
    predictions = [predict_bloom(loc.ndvi_series, threshold) for loc in dataset.locations]
    df["bloom_step"] = pd.array([p.step for p in predictions], dtype="Int64")
    df["prediction"] = [p.message for p in predictions]
    return df
