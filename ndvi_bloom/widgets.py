"""
Presentation widgets.

The presenter only talks to the three capability interfaces below. The concrete
classes build folium maps and plotly figures that the Streamlit page renders.
"""
from __future__ import annotations

import json
import logging
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

import folium
import plotly.graph_objects as go

from .config import (
    CHART_FILL_COLOR,
    CHART_LABELS,
    CHART_LINE_COLOR,
    CHART_SMOOTHING,
    CHART_TITLE,
    MAP_CENTER,
    MAP_ZOOM,
    TILE_ATTRIBUTION,
    TILE_URL,
)
from .models import Dataset, GeoPoint

logger = logging.getLogger(__name__)

ClickHandler = Callable[[GeoPoint], None]


# ============================================================================
# CAPABILITIES
# ============================================================================
class MapWidget(Protocol):
    def on_click(self, handler: ClickHandler) -> None:
        ...

    def show_popup(self, point: GeoPoint, html: str) -> None:
        ...


class ChartWidget(Protocol):
    def set_series(self, values: Sequence[float]) -> None:
        ...

    def update(self) -> None:
        ...


class TextPanel(Protocol):
    def set_html(self, html: str) -> None:
        ...


# ============================================================================
# NDVI CLASSES
# ============================================================================
NDVI_CLASSES = [
    (0.2, "0.0-0.2", "Bare Soil / Water", "#8B4513"),
    (0.4, "0.2-0.4", "Sparse Vegetation", "#FFD700"),
    (0.6, "0.4-0.6", "Moderate Vegetation", "#90EE90"),
    (0.8, "0.6-0.8", "Dense Vegetation", "#228B22"),
    (float("inf"), "0.8-1.0", "Very Dense Vegetation", "#006400"),
]


def _ndvi_class(ndvi_value):
    for upper, range_str, category, color in NDVI_CLASSES:
        if ndvi_value < upper:
            return range_str, category, color
    # NaN compares False everywhere
    return NDVI_CLASSES[0][1:]


def get_ndvi_color(ndvi_value):
    """Map NDVI value to color"""
    return _ndvi_class(ndvi_value)[2]


def get_ndvi_category(ndvi_value):
    """Get NDVI category label"""
    return _ndvi_class(ndvi_value)[1]


# ============================================================================
# MAP
# ============================================================================
class FoliumMapWidget:
    """Leaflet map (through folium) with a single tile layer.

    Click events arrive from the page (streamlit-folium reports the last
    clicked coordinate) and are forwarded with ``dispatch_click``.
    """

    def __init__(
        self,
        center: Tuple[float, float] = MAP_CENTER,
        zoom: int = MAP_ZOOM,
        tiles: str = TILE_URL,
        attribution: str = TILE_ATTRIBUTION,
    ):
        self.center = center
        self.zoom = zoom
        self.tiles = tiles
        self.attribution = attribution
        self.popup: Optional[Tuple[GeoPoint, str]] = None
        self._handlers: List[ClickHandler] = []
        self._dataset: Optional[Dataset] = None

    def on_click(self, handler: ClickHandler) -> None:
        self._handlers.append(handler)

    def dispatch_click(self, point: GeoPoint) -> None:
        for handler in self._handlers:
            handler(point)

    def show_popup(self, point: GeoPoint, html: str) -> None:
        self.popup = (point, html)

    def set_overlay(self, dataset: Optional[Dataset]) -> None:
        """Draw the sample locations, colored by peak NDVI"""
        self._dataset = dataset

    def build(self) -> folium.Map:
        m = folium.Map(location=list(self.center), zoom_start=self.zoom, tiles=None)

        folium.TileLayer(
            tiles=self.tiles,
            attr=self.attribution,
            name="OpenStreetMap",
            control=False,
        ).add_to(m)

        if self._dataset is not None:
            for loc in self._dataset.locations:
                peak = loc.peak_ndvi
                folium.CircleMarker(
                    location=[loc.lat, loc.lon],
                    radius=6,
                    color="#333333",
                    weight=1,
                    fill=True,
                    fill_color=get_ndvi_color(peak),
                    fill_opacity=0.8,
                    tooltip=(
                        f"<b>Lat:</b> {loc.lat}, <b>Lon:</b> {loc.lon}<br>"
                        f"<b>Peak NDVI:</b> {peak:.2f} ({get_ndvi_category(peak)})"
                    ),
                ).add_to(m)

        if self.popup is not None:
            point, html = self.popup
            folium.Marker(
                location=[point.lat, point.lon],
                popup=folium.Popup(html, max_width=300, show=True),
                icon=folium.Icon(color="green", icon="leaf"),
            ).add_to(m)

        return m


# ============================================================================
# CHART
# ============================================================================
class PlotlyChartWidget:
    """Line chart of an NDVI series over a fixed step axis.

    Like a Chart.js chart, ``set_series`` only replaces the data; the figure
    changes on ``update``.
    """

    def __init__(self, labels: Sequence[str] = CHART_LABELS, title: str = CHART_TITLE):
        self.labels = list(labels)
        self.title = title
        self.series: List[float] = [0.0] * len(self.labels)
        self.revision = 0
        self.figure = self._build()

    def set_series(self, values: Sequence[float]) -> None:
        self.series = [float(v) for v in values]

    def update(self) -> None:
        self.revision += 1
        self.figure = self._build()

    def _axis_labels(self) -> List[str]:
        labels = list(self.labels)
        for i in range(len(labels), len(self.series)):
            labels.append(f"Step {i + 1}")
        return labels

    def _build(self) -> go.Figure:
        labels = self._axis_labels()
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=labels[: len(self.series)],
            y=self.series,
            mode="lines+markers",
            name=self.title,
            line=dict(color=CHART_LINE_COLOR, shape="spline", smoothing=CHART_SMOOTHING),
            fill="tozeroy",
            fillcolor=CHART_FILL_COLOR,
        ))
        fig.update_layout(
            showlegend=True,
            xaxis=dict(categoryorder="array", categoryarray=labels),
            yaxis=dict(range=[0, 1], title="NDVI"),
            height=350,
            margin=dict(l=20, r=20, t=30, b=20),
            uirevision=self.revision,
        )
        return fig


# ============================================================================
# TEXT PANEL
# ============================================================================
class HtmlTextPanel:
    def __init__(self, html: str = ""):
        self.html = html

    def set_html(self, html: str) -> None:
        self.html = html


def smooth_scroll_script(target_id: str) -> str:
    """HTML snippet scrolling the parent page to ``target_id``"""
    return (
        "<script>"
        f"const el = window.parent.document.getElementById({json.dumps(target_id)});"
        "if (el) { el.scrollIntoView({behavior: 'smooth'}); }"
        "</script>"
    )
