import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

pytest.importorskip("PyQt5")

from PyQt5 import QtCore, QtGui, QtTest, QtWidgets

from hue_core.drag_controller import DragState
from hue_core.items import Item
from hue_core.sequence_store import SequenceStore
from hue_viewer.config import HueViewerSettings
from hue_viewer.tile_grid_widget import TileGridWidget


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


def _store(ranks: list[int]) -> SequenceStore:
    items = [Item(f"t{rank}", rank, f"#0000{rank:02X}") for rank in range(len(ranks))]
    store = SequenceStore()
    store.initialize(items, [items[rank] for rank in ranks[1:-1]])
    return store


@pytest.fixture
def widget(qapp):
    store = _store([0, 3, 1, 4, 2, 5])
    grid = TileGridWidget(store, HueViewerSettings(hitbox_padding=0.0))
    grid.resize(600, 120)
    grid.show()
    grid.refresh()
    return grid


def _center(widget: TileGridWidget, index: int) -> QtCore.QPoint:
    x, y = widget.grid.box_of(index).center
    return QtCore.QPoint(int(x), int(y))


def _move(widget: TileGridWidget, pos: QtCore.QPoint) -> None:
    event = QtGui.QMouseEvent(
        QtCore.QEvent.MouseMove,
        QtCore.QPointF(pos),
        QtCore.Qt.NoButton,
        QtCore.Qt.LeftButton,
        QtCore.Qt.NoModifier,
    )
    QtWidgets.QApplication.sendEvent(widget, event)


def test_layout_tracks_store_size(widget):
    assert widget.grid.count == 6
    assert widget.grid.columns >= 6
    assert widget.minimumHeight() == int(widget.grid.content_size()[1])


def test_mouse_drag_reorders_and_scores(widget):
    scores = []
    widget.scored.connect(scores.append)
    store = widget.controller._store
    item = store.item_at(1)

    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 1))
    assert widget.controller.state is DragState.DRAGGING

    target = _center(widget, 3) + QtCore.QPoint(5, 0)
    _move(widget, target)
    QtTest.QTest.mouseRelease(widget, QtCore.Qt.LeftButton, pos=target)

    assert store.index_of(item) == 3
    assert widget.controller.state is DragState.IDLE
    assert len(scores) == 1
    assert scores[0].inversions == 3


def test_press_on_pinned_tile_does_not_start_drag(widget):
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 0))
    assert widget.controller.state is DragState.IDLE


def test_escape_cancels_drag(widget):
    store = widget.controller._store
    before = store.current_arrangement()
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 2))
    _move(widget, _center(widget, 4) + QtCore.QPoint(40, 0))
    assert store.current_arrangement() != before

    QtTest.QTest.keyClick(widget, QtCore.Qt.Key_Escape)

    assert store.current_arrangement() == before
    assert widget.controller.state is DragState.IDLE


def test_disabling_interaction_cancels_and_blocks_drags(widget):
    store = widget.controller._store
    before = store.current_arrangement()
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 2))
    _move(widget, _center(widget, 4) + QtCore.QPoint(40, 0))

    widget.set_interactive(False)

    assert store.current_arrangement() == before
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 2))
    assert widget.controller.state is DragState.IDLE


def test_paint_with_active_drag_does_not_fail(widget):
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 1))
    image = widget.grab()
    assert not image.isNull()


def test_focus_loss_cancels_drag(widget):
    store = widget.controller._store
    before = store.current_arrangement()
    QtTest.QTest.mousePress(widget, QtCore.Qt.LeftButton, pos=_center(widget, 2))
    _move(widget, _center(widget, 4) + QtCore.QPoint(40, 0))
    assert store.current_arrangement() != before

    event = QtGui.QFocusEvent(QtCore.QEvent.FocusOut, QtCore.Qt.ActiveWindowFocusReason)
    QtWidgets.QApplication.sendEvent(widget, event)

    assert store.current_arrangement() == before
    assert widget.controller.state is DragState.IDLE
