"""Start/submit/retake lifecycle of one exercise run."""

from __future__ import annotations

from enum import Enum
import logging
import random

from PyQt5 import QtCore

from hue_core.palette import build_items, palette_colors, shuffled_interior
from hue_core.scoring import ScoreReport, evaluate
from hue_core.sequence_store import SequenceStore
from hue_viewer.config import HueViewerSettings
from hue_viewer.presentation import format_elapsed

logger = logging.getLogger(__name__)


class SessionState(Enum):
    READY = "ready"
    RUNNING = "running"
    SUBMITTED = "submitted"


class ExerciseSession(QtCore.QObject):
    """Owns the :class:`SequenceStore` of a run and its elapsed-time clock."""

    stateChanged = QtCore.pyqtSignal(object)
    arrangementReset = QtCore.pyqtSignal()
    elapsedChanged = QtCore.pyqtSignal(str)
    submitted = QtCore.pyqtSignal(object)

    TICK_MS = 1000

    def __init__(
        self,
        settings: HueViewerSettings,
        store: SequenceStore | None = None,
        rng: random.Random | None = None,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._store = store or SequenceStore()
        self._rng = rng or random.Random(settings.seed)
        self._state = SessionState.READY
        self._clock = QtCore.QElapsedTimer()
        self._final_elapsed_ms = 0
        self._last_report: ScoreReport | None = None
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(self.TICK_MS)
        self._timer.timeout.connect(self._tick)

    @property
    def store(self) -> SequenceStore:
        return self._store

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def last_report(self) -> ScoreReport | None:
        return self._last_report

    @property
    def elapsed_ms(self) -> int:
        if self._state is SessionState.RUNNING and self._clock.isValid():
            return int(self._clock.elapsed())
        return self._final_elapsed_ms

    def start(self) -> None:
        if self._state is SessionState.RUNNING:
            return
        colors = palette_colors(self._settings.palette, self._settings.sample_count)
        items = build_items(colors)
        self._store.initialize(items, shuffled_interior(items, self._rng))
        self._last_report = None
        self._final_elapsed_ms = 0
        self._clock.start()
        self._timer.start()
        logger.info(
            "Exercise started with %d %s samples", len(items), self._settings.palette
        )
        self._set_state(SessionState.RUNNING)
        self.arrangementReset.emit()
        self.elapsedChanged.emit(format_elapsed(0))

    def submit(self) -> ScoreReport | None:
        if self._state is not SessionState.RUNNING:
            return None
        self._timer.stop()
        self._final_elapsed_ms = int(self._clock.elapsed())
        report = evaluate(
            self._store.current_arrangement(),
            self._store.canonical_order(),
            self._settings.scoring_mode,
        )
        self._last_report = report
        logger.info(
            "Exercise submitted after %s: score %d (%s), circular error %d",
            format_elapsed(self._final_elapsed_ms),
            report.score,
            report.band.value,
            report.circular_error,
        )
        self._set_state(SessionState.SUBMITTED)
        self.elapsedChanged.emit(format_elapsed(self._final_elapsed_ms))
        self.submitted.emit(report)
        return report

    def retake(self) -> None:
        self._timer.stop()
        self._store.clear()
        self._last_report = None
        self._final_elapsed_ms = 0
        self._clock.invalidate()
        logger.info("Exercise reset")
        self._set_state(SessionState.READY)
        self.arrangementReset.emit()
        self.elapsedChanged.emit(format_elapsed(0))

    def _tick(self) -> None:
        self.elapsedChanged.emit(format_elapsed(self.elapsed_ms))

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        self._state = state
        self.stateChanged.emit(state)
