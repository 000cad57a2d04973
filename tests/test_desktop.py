import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from rectangle_measurement_tool import MeasurementWindow  # noqa: E402
from rectmeasure.drawing import PointerAction, PointerEvent  # noqa: E402
from rectmeasure.session import MeasurementSession  # noqa: E402
from rectmeasure.storage import MemoryStore  # noqa: E402


@pytest.fixture
def window():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    measurement_window = MeasurementWindow(MeasurementSession.open(MemoryStore()))
    yield measurement_window
    measurement_window.close()
    app.processEvents()


def test_drag_moves_redraw_only_the_scene(window, monkeypatch):
    table_refreshes = []
    monkeypatch.setattr(window, "refresh_table", lambda: table_refreshes.append(True))

    window.handle_pointer(PointerEvent(PointerAction.DOWN, 10, 10))
    assert len(table_refreshes) == 1

    window.handle_pointer(PointerEvent(PointerAction.MOVE, 40, 30))
    window.handle_pointer(PointerEvent(PointerAction.MOVE, 60, 50))
    assert len(table_refreshes) == 1
    assert window.preview_item is not None

    window.handle_pointer(PointerEvent(PointerAction.UP, 60, 50))
    assert len(table_refreshes) == 2
    assert window.preview_item is None
    assert len(window.rect_items) == 1


def test_empty_table_shows_message(window):
    assert window.table.rowCount() == 1
    assert window.table.item(0, 0).text() == "No records found."
