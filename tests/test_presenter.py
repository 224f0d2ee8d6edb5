import pytest

from ndvi_bloom.models import Dataset, GeoPoint
from ndvi_bloom.presenter import (
    EMPTY_DATASET_MESSAGE,
    NOT_LOADED_MESSAGE,
    BloomPresenter,
    format_coordinate,
)
from ndvi_bloom.store import NOT_READY


class FakeStore:
    def __init__(self, dataset=NOT_READY):
        self.dataset = dataset

    def get(self):
        return self.dataset


class FakeMap:
    def __init__(self):
        self.handlers = []
        self.popups = []

    def on_click(self, handler):
        self.handlers.append(handler)

    def click(self, lat, lon):
        for handler in self.handlers:
            handler(GeoPoint(lat, lon))

    def show_popup(self, point, html):
        self.popups.append((point, html))


class FakeChart:
    def __init__(self):
        self.series = None
        self.updates = 0

    def set_series(self, values):
        self.series = list(values)

    def update(self):
        self.updates += 1


class FakePanel:
    def __init__(self):
        self.html = None

    def set_html(self, html):
        self.html = html


def _presenter(store, panel=None):
    alerts = []
    presenter = BloomPresenter(store, FakeMap(), FakeChart(), panel=panel, alert=alerts.append)
    return presenter, alerts


def test_click_before_load_only_alerts():
    presenter, alerts = _presenter(FakeStore(), panel=FakePanel())
    presenter.map.click(20.0, 78.0)

    assert alerts == [NOT_LOADED_MESSAGE]
    assert presenter.map.popups == []
    assert presenter.chart.updates == 0
    assert presenter.panel.html is None
    assert presenter.last_result is None


def test_click_updates_popup_panel_and_chart(dataset):
    presenter, alerts = _presenter(FakeStore(dataset), panel=FakePanel())
    presenter.map.click(22.0, 88.0)

    assert alerts == []
    result = presenter.last_result
    assert result.record is dataset.locations[1]
    assert result.prediction.message == "bloom predicted in 2 steps"

    point, html = presenter.map.popups[-1]
    assert point == GeoPoint(22.0, 88.0)
    assert html == "<b>🌸 Bloom predicted in 2 steps</b><br>Lat: 22.5, Lon: 88.3"
    assert presenter.panel.html == (
        "Predicted Bloom Index at (22.5, 88.3): <b>🌸 Bloom predicted in 2 steps</b>"
    )
    assert presenter.chart.series == pytest.approx([0.1, 0.7, 0.9])
    assert presenter.chart.updates == 1


def test_click_without_panel_is_silent(dataset):
    presenter, alerts = _presenter(FakeStore(dataset))
    result = presenter.handle_click((20.0, 78.0))

    assert alerts == []
    assert result.prediction.message == "no bloom predicted"
    assert "No bloom predicted" in presenter.map.popups[-1][1]


def test_click_on_empty_dataset_alerts():
    presenter, alerts = _presenter(FakeStore(Dataset()), panel=FakePanel())
    assert presenter.handle_click((0.0, 0.0)) is None
    assert alerts == [EMPTY_DATASET_MESSAGE]
    assert presenter.chart.updates == 0


def test_each_click_is_handled_independently(dataset):
    presenter, _ = _presenter(FakeStore(dataset))
    presenter.map.click(22.0, 88.0)
    presenter.map.click(13.0, 77.5)
    assert presenter.chart.series == pytest.approx([0.66, 0.1])
    assert presenter.chart.updates == 2
    assert len(presenter.map.popups) == 2


@pytest.mark.parametrize(
    "value, text",
    [(20.0, "20"), (20.5937, "20.5937"), (-3.0, "-3"), (78.96290001, "78.96290001")],
)
def test_format_coordinate(value, text):
    assert format_coordinate(value) == text
