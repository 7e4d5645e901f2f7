"""Reordering and scoring engine for the hue ordering exercise."""

from hue_core.drag_controller import DragReorderController, DragSession, DragState
from hue_core.errors import (
    HueOrderError,
    InvalidInputError,
    PinnedItemError,
    UnknownItemError,
)
from hue_core.geometry import Rect
from hue_core.items import Item
from hue_core.scoring import ScoreBand, ScoreReport, ScoringMode, evaluate
from hue_core.sequence_store import SequenceStore

__all__ = [
    "DragReorderController",
    "DragSession",
    "DragState",
    "HueOrderError",
    "InvalidInputError",
    "Item",
    "PinnedItemError",
    "Rect",
    "ScoreBand",
    "ScoreReport",
    "ScoringMode",
    "SequenceStore",
    "UnknownItemError",
    "evaluate",
]
