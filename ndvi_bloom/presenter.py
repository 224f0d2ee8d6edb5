"""Map click handling: nearest location, bloom prediction, widget updates."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .bloom import BloomPrediction, predict_bloom
from .exceptions import EmptyDatasetError
from .models import GeoPoint, LocationRecord
from .nearest import nearest_location
from .store import NOT_READY, DatasetStore
from .widgets import ChartWidget, MapWidget, TextPanel

logger = logging.getLogger(__name__)

NOT_LOADED_MESSAGE = "NDVI data not loaded yet!"
EMPTY_DATASET_MESSAGE = "The NDVI dataset has no locations."


def format_coordinate(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def popup_html(prediction: BloomPrediction, record: LocationRecord) -> str:
    return (
        f"<b>{prediction.label}</b><br>"
        f"Lat: {format_coordinate(record.lat)}, Lon: {format_coordinate(record.lon)}"
    )


def panel_html(prediction: BloomPrediction, record: LocationRecord) -> str:
    return (
        f"Predicted Bloom Index at ({format_coordinate(record.lat)}, "
        f"{format_coordinate(record.lon)}): <b>{prediction.label}</b>"
    )


@dataclass(frozen=True)
class ClickResult:
    point: GeoPoint
    record: LocationRecord
    prediction: BloomPrediction


class BloomPresenter:
    """Drives the map, chart and text panel from map clicks.

    Args:
        store: Dataset store read on every click.
        map_widget: Source of click events and target of the popup.
        chart: Receives the nearest location's NDVI series.
        panel: Optional text panel; skipped when None.
        alert: Called with a user-facing message when a click cannot be
            answered (data not loaded, empty dataset).
    """

    def __init__(
        self,
        store: DatasetStore,
        map_widget: MapWidget,
        chart: ChartWidget,
        panel: Optional[TextPanel] = None,
        alert: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.map = map_widget
        self.chart = chart
        self.panel = panel
        self.alert = alert or (lambda message: None)
        self.last_result: Optional[ClickResult] = None
        self.map.on_click(self.handle_click)

    def handle_click(self, point) -> Optional[ClickResult]:
        point = GeoPoint(float(point[0]), float(point[1]))

        dataset = self.store.get()
        if dataset is NOT_READY:
            logger.warning("Click at %s before NDVI data was loaded", point)
            self.alert(NOT_LOADED_MESSAGE)
            return None

        try:
            record = nearest_location(point, dataset)
        except EmptyDatasetError as e:
            logger.error("Click at %s: %s", point, e)
            self.alert(EMPTY_DATASET_MESSAGE)
            return None
        logger.info("Click at %s -> nearest location (%s, %s)", point, record.lat, record.lon)

        prediction = predict_bloom(record.ndvi_series)
        logger.info("Bloom result: %s", prediction)

        self.map.show_popup(point, popup_html(prediction, record))
        if self.panel is not None:
            self.panel.set_html(panel_html(prediction, record))
        self.chart.set_series(record.ndvi_series)
        self.chart.update()

        self.last_result = ClickResult(point, record, prediction)
        return self.last_result
