from __future__ import annotations

import logging
from typing import List

from PyQt5 import QtCore, QtGui, QtWidgets

from hue_core.errors import InvalidInputError
from hue_core.scoring import ScoreReport
from hue_viewer.config import HueViewerSettings
from hue_viewer.presentation import INSTRUCTIONS, TITLE, format_elapsed, format_score
from hue_viewer.session import ExerciseSession, SessionState
from hue_viewer.tile_grid_widget import TileGridWidget

logger = logging.getLogger(__name__)


class HueViewerApp(QtWidgets.QApplication):
    """Thin application wrapper for the hue viewer."""

    def __init__(self, argv: List[str]):
        super().__init__(argv)
        self.setQuitOnLastWindowClosed(True)
        self.window: HueViewerWindow | None = None


class HueViewerWindow(QtWidgets.QMainWindow):
    """Single window hosting the tile grid, the run controls and the result."""

    def __init__(self, settings: HueViewerSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle(TITLE)
        self.resize(960, 720)
        self._settings = settings or HueViewerSettings()
        self._session = ExerciseSession(self._settings, parent=self)
        self._moves_since_start = 0

        self._title_label = QtWidgets.QLabel(TITLE)
        title_font = QtGui.QFont(self._title_label.font())
        title_font.setBold(True)
        title_font.setPointSize(title_font.pointSize() + 6)
        self._title_label.setFont(title_font)
        self._title_label.setAlignment(QtCore.Qt.AlignCenter)

        self._instructions_label = QtWidgets.QLabel(INSTRUCTIONS)
        self._instructions_label.setWordWrap(True)
        self._instructions_label.setAlignment(QtCore.Qt.AlignCenter)

        self._start_button = QtWidgets.QPushButton("Start Test")
        self._submit_button = QtWidgets.QPushButton("Submit")
        self._retake_button = QtWidgets.QPushButton("Retake Test")
        self._timer_label = QtWidgets.QLabel(format_elapsed(0))

        self._grid = TileGridWidget(self._session.store, self._settings)
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._grid)

        self._result_label = QtWidgets.QLabel()
        self._result_label.setAlignment(QtCore.Qt.AlignCenter)
        self._result_label.setStyleSheet(
            "background-color: #333; color: white; padding: 15px; border-radius: 8px;"
        )
        self._result_label.hide()

        controls = QtWidgets.QHBoxLayout()
        controls.addWidget(self._start_button)
        controls.addWidget(self._submit_button)
        controls.addWidget(self._retake_button)
        controls.addStretch(1)
        controls.addWidget(self._timer_label)

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(self._title_label)
        layout.addWidget(self._instructions_label)
        layout.addLayout(controls)
        layout.addWidget(scroll, 1)
        layout.addWidget(self._result_label)
        container = QtWidgets.QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self._start_button.clicked.connect(self.start_exercise)
        self._submit_button.clicked.connect(self.submit_exercise)
        self._retake_button.clicked.connect(self.retake_exercise)
        self._session.elapsedChanged.connect(self._timer_label.setText)
        self._session.stateChanged.connect(self._on_state_changed)
        self._session.arrangementReset.connect(self._grid.refresh)
        self._session.submitted.connect(self._show_result)
        self._grid.scored.connect(self._on_drag_scored)

        self._on_state_changed(self._session.state)

    @property
    def session(self) -> ExerciseSession:
        return self._session

    @property
    def grid(self) -> TileGridWidget:
        return self._grid

    def show_status_message(self, message: str, timeout_ms: int = 5000) -> None:
        self.statusBar().showMessage(message, timeout_ms)

    def start_exercise(self) -> None:
        self._grid.cancel_drag()
        self._result_label.hide()
        self._moves_since_start = 0
        try:
            self._session.start()
        except InvalidInputError as exc:
            logger.exception("Could not start exercise")
            self.show_status_message(f"Could not start: {exc}")
            return
        self._grid.setFocus()

    def submit_exercise(self) -> None:
        self._grid.set_interactive(False)
        self._session.submit()

    def retake_exercise(self) -> None:
        self._grid.cancel_drag()
        self._result_label.hide()
        self._session.retake()

    def _on_state_changed(self, state: SessionState) -> None:
        running = state is SessionState.RUNNING
        self._start_button.setEnabled(state is SessionState.READY)
        self._submit_button.setEnabled(running)
        self._retake_button.setEnabled(state is not SessionState.READY)
        self._grid.set_interactive(running)

    def _on_drag_scored(self, report: ScoreReport) -> None:
        self._moves_since_start += 1
        logger.debug(
            "Move %d finished, arrangement at %d/%d inversions",
            self._moves_since_start,
            report.inversions,
            report.max_inversions,
        )

    def _show_result(self, report: ScoreReport) -> None:
        self._result_label.setText(format_score(report, self._settings.scoring_mode))
        self._result_label.show()
        self.show_status_message(
            f"Submitted after {self._moves_since_start} moves", timeout_ms=0
        )
