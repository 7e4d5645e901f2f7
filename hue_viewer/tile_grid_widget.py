from __future__ import annotations

import logging

from PyQt5 import QtCore, QtGui, QtWidgets

from hue_core.drag_controller import DragReorderController
from hue_core.geometry import Rect
from hue_core.sequence_store import SequenceStore
from hue_viewer.config import HueViewerSettings
from hue_viewer.layout import TileGridLayout

logger = logging.getLogger(__name__)


def _to_qrect(box: Rect) -> QtCore.QRectF:
    return QtCore.QRectF(box.left, box.top, box.width, box.height)


class TileGridWidget(QtWidgets.QWidget):
    """Paints the arrangement as a wrapping grid and feeds mouse drags to the
    :class:`DragReorderController`.

    The widget never holds arrangement state of its own: every paint reads the
    store, and the grid geometry is recomputed on resize.
    """

    arrangementChanged = QtCore.pyqtSignal()
    scored = QtCore.pyqtSignal(object)

    _BACKGROUND = QtGui.QColor("#F0F0F0")
    _PINNED_OUTLINE = QtGui.QColor("#FFD700")
    _PLACEHOLDER_FILL = QtGui.QColor("#DDDDDD")
    _PLACEHOLDER_BORDER = QtGui.QColor("#999999")
    _CORNER_RADIUS = 4.0
    _DRAG_SCALE = 1.1

    def __init__(
        self,
        store: SequenceStore,
        settings: HueViewerSettings,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Preferred
        )
        self._store = store
        self._settings = settings
        self._interactive = True
        self._grab_offset = (0.0, 0.0)
        self._grid = self._layout_for_width(self.width())
        self._controller = DragReorderController(
            store,
            self._box_of,
            scoring_mode=settings.scoring_mode,
            on_scored=self.scored.emit,
            row_height_threshold=settings.row_height_threshold,
            hitbox_padding=settings.hitbox_padding,
        )

    @property
    def controller(self) -> DragReorderController:
        return self._controller

    @property
    def grid(self) -> TileGridLayout:
        return self._grid

    @property
    def interactive(self) -> bool:
        return self._interactive

    def set_interactive(self, enabled: bool) -> None:
        if not enabled:
            self.cancel_drag()
        self._interactive = enabled
        self.unsetCursor()
        self.update()

    def refresh(self) -> None:
        self._grid = self._layout_for_width(self.width())
        self._sync_minimum_height()
        self.update()

    def cancel_drag(self) -> bool:
        if not self._controller.on_gesture_cancel():
            return False
        self.unsetCursor()
        self.arrangementChanged.emit()
        self.update()
        return True

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def _layout_for_width(self, width: int) -> TileGridLayout:
        return TileGridLayout.for_width(
            len(self._store),
            width,
            tile_size=self._settings.tile_size,
            spacing=self._settings.spacing,
            padding=self._settings.padding,
            pin_last_to_corner=self._settings.pin_last_to_corner,
        )

    def _box_of(self, index: int) -> Rect | None:
        return self._grid.box_of(index)

    def _sync_minimum_height(self) -> None:
        _, height = self._grid.content_size()
        self.setMinimumHeight(int(height))

    def hasHeightForWidth(self) -> bool:  # noqa: N802
        return True

    def heightForWidth(self, width: int) -> int:  # noqa: N802
        _, height = self._layout_for_width(width).content_size()
        return int(height)

    def sizeHint(self) -> QtCore.QSize:  # noqa: N802
        width = 800
        return QtCore.QSize(width, self.heightForWidth(width))

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        previous_rows = self._grid.rows
        self._grid = self._layout_for_width(event.size().width())
        if self._grid.rows != previous_rows:
            self._sync_minimum_height()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: D401
        _ = event
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), self._BACKGROUND)
        if not self._store.is_initialized:
            return

        session = self._controller.session
        for index, item in enumerate(self._store.current_arrangement()):
            box = self._grid.box_of(index)
            if box is None:
                continue
            rect = _to_qrect(box)
            if session is not None and item is session.item:
                self._draw_placeholder(painter, rect)
                continue
            if self._store.is_pinned_index(index):
                painter.setPen(QtGui.QPen(self._PINNED_OUTLINE, 3))
            else:
                painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(QtGui.QColor(item.value))
            painter.drawRoundedRect(rect, self._CORNER_RADIUS, self._CORNER_RADIUS)

        if session is not None:
            self._draw_dragged(painter, session.item.value, session.last_pointer)

    def _draw_placeholder(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        pen = QtGui.QPen(self._PLACEHOLDER_BORDER, 2)
        pen.setStyle(QtCore.Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(self._PLACEHOLDER_FILL)
        painter.drawRoundedRect(rect, self._CORNER_RADIUS, self._CORNER_RADIUS)

    def _draw_dragged(
        self, painter: QtGui.QPainter, color: str, pointer: tuple[float, float]
    ) -> None:
        size = self._settings.tile_size * self._DRAG_SCALE
        grab_x, grab_y = self._grab_offset
        left = pointer[0] - grab_x * self._DRAG_SCALE
        top = pointer[1] - grab_y * self._DRAG_SCALE
        painter.save()
        painter.setOpacity(0.8)
        painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 80), 1))
        painter.setBrush(QtGui.QColor(color))
        painter.drawRoundedRect(
            QtCore.QRectF(left, top, size, size), self._CORNER_RADIUS, self._CORNER_RADIUS
        )
        painter.restore()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() != QtCore.Qt.LeftButton or not self._interactive:
            return
        x, y = float(event.pos().x()), float(event.pos().y())
        index = self._controller.pick_index(x, y)
        if index is None:
            return
        item = self._store.item_at(index)
        if not self._controller.on_gesture_start(item, (x, y)):
            return
        box = self._grid.box_of(index)
        if box is not None:
            self._grab_offset = (x - box.left, y - box.top)
        self.setCursor(QtCore.Qt.ClosedHandCursor)
        self.update()

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        x, y = float(event.pos().x()), float(event.pos().y())
        if self._controller.is_dragging:
            before = self._store.current_arrangement()
            self._controller.on_gesture_move((x, y))
            if self._store.current_arrangement() != before:
                self.arrangementChanged.emit()
            self.update()
            return
        if not self._interactive:
            return
        hovered = self._controller.pick_index(x, y)
        self.setCursor(
            QtCore.Qt.OpenHandCursor if hovered is not None else QtCore.Qt.ArrowCursor
        )

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() != QtCore.Qt.LeftButton:
            return
        if self._controller.on_gesture_end() is not None:
            self.setCursor(QtCore.Qt.OpenHandCursor)
            self.update()

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:  # noqa: D401
        if event.key() == QtCore.Qt.Key_Escape and self.cancel_drag():
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event: QtGui.QFocusEvent) -> None:  # noqa: D401
        if self.cancel_drag():
            logger.debug("Drag cancelled on focus loss (reason %s)", event.reason())
        super().focusOutEvent(event)
