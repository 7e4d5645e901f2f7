"""Gesture state machine that turns pointer drags into arrangement moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable

from hue_core.geometry import BoxQuery, Point, Rect, dist2
from hue_core.items import Item
from hue_core.scoring import ScoreReport, ScoringMode, evaluate
from hue_core.sequence_store import SequenceStore

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class RowRelation(Enum):
    SAME = "same"
    ABOVE = "above"
    BELOW = "below"


@dataclass
class DragSession:
    item: Item
    origin_index: int
    last_pointer: Point


def classify_row(dy: float, threshold: float) -> RowRelation:
    """Where a tile's row sits relative to the pointer.

    ``dy`` is ``pointer_y - center_y``; a positive value beyond the threshold
    means the pointer is below the tile, so the tile's row is above it.
    """

    if abs(dy) < threshold:
        return RowRelation.SAME
    return RowRelation.ABOVE if dy > 0 else RowRelation.BELOW


class DragReorderController:
    """Single-session drag state machine over a :class:`SequenceStore`.

    Gesture handlers never raise for racy input: a start on a pinned or
    unknown item, a move while idle or a resolve without layout data are all
    ignored. Every move is applied to the store immediately so the next frame
    renders the live order; cancel puts the dragged item back at its origin.
    """

    def __init__(
        self,
        store: SequenceStore,
        box_of: BoxQuery,
        *,
        scoring_mode: ScoringMode = ScoringMode.INVERSION,
        on_scored: Callable[[ScoreReport], None] | None = None,
        row_height_threshold: float | None = None,
        hitbox_padding: float = 0.0,
    ) -> None:
        self._store = store
        self._box_of = box_of
        self.scoring_mode = ScoringMode(scoring_mode)
        self._on_scored = on_scored
        self.row_height_threshold = row_height_threshold
        self.hitbox_padding = hitbox_padding
        self._session: DragSession | None = None

    @property
    def state(self) -> DragState:
        return DragState.IDLE if self._session is None else DragState.DRAGGING

    @property
    def session(self) -> DragSession | None:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    def set_layout(self, box_of: BoxQuery) -> None:
        self._box_of = box_of

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------
    def pick_index(self, x: float, y: float) -> int | None:
        """Index of the draggable tile under the pointer, if any.

        Tiles are padded by ``hitbox_padding``; when padded boxes overlap the
        tile with the nearest center wins, then the lowest index.
        """

        pointer = (x, y)
        best: int | None = None
        best_d2 = 0.0
        for index in self._store.interior_indices():
            box = self._box_of(index)
            if box is None:
                continue
            if not box.expanded(self.hitbox_padding).contains(pointer):
                continue
            d2 = dist2(box.center, pointer)
            if best is None or d2 < best_d2:
                best = index
                best_d2 = d2
        return best

    # ------------------------------------------------------------------
    # Gesture surface
    # ------------------------------------------------------------------
    def on_gesture_start(self, item: Item | None, pointer: Point) -> bool:
        if self._session is not None:
            logger.debug(
                "Ignoring gesture start while %r is being dragged", self._session.item
            )
            return False
        if item is None or item not in self._store:
            return False
        if self._store.is_pinned(item):
            logger.debug("Rejected drag on pinned %r", item)
            return False

        origin = self._store.index_of(item)
        self._session = DragSession(item=item, origin_index=origin, last_pointer=pointer)
        logger.debug("Drag started on %r at index %d", item, origin)
        return True

    def on_gesture_move(self, pointer: Point) -> int | None:
        """Follow the pointer and return the index the dragged item now has."""

        session = self._session
        if session is None:
            return None
        session.last_pointer = pointer
        target = self.resolve_insertion_index(*pointer)
        if target is None:
            return None
        if self._store.move_item(session.item, target):
            logger.debug("Moved %r to index %d", session.item, target)
        return target

    def on_gesture_end(self) -> ScoreReport | None:
        session = self._session
        if session is None:
            return None
        self._session = None
        logger.debug(
            "Drag on %r committed at index %d (origin %d)",
            session.item,
            self._store.index_of(session.item),
            session.origin_index,
        )
        report = self.score()
        if self._on_scored is not None:
            self._on_scored(report)
        return report

    def on_gesture_cancel(self) -> bool:
        session = self._session
        if session is None:
            return False
        self._store.move_item(session.item, session.origin_index)
        self._session = None
        logger.debug("Drag on %r cancelled, restored index %d", session.item, session.origin_index)
        return True

    def score(self) -> ScoreReport:
        return evaluate(
            self._store.current_arrangement(),
            self._store.canonical_order(),
            self.scoring_mode,
        )

    # ------------------------------------------------------------------
    # Insertion target
    # ------------------------------------------------------------------
    def resolve_insertion_index(self, x: float, y: float) -> int | None:
        """Final index the dragged item should take for a pointer at ``(x, y)``.

        Same-row tiles are tried first: the dragged item goes in front of the
        closest tile whose center is at or right of the pointer. Without one,
        the nearest tile by distance decides, inserting before it when its row
        is below the pointer (or it is right of the pointer) and after it
        otherwise. The pinned ends only act as anchors in that fallback and
        never receive the item. Ties go to the lowest index.
        """

        session = self._session
        if session is None:
            return None

        count = len(self._store)
        dragged = self._store.index_of(session.item)
        candidates = [index for index in self._store.interior_indices() if index != dragged]
        if not candidates:
            return dragged

        boxes: dict[int, Rect] = {}
        for index in candidates:
            box = self._box_of(index)
            if box is not None:
                boxes[index] = box
        if not boxes:
            return None

        best_same: int | None = None
        best_offset = 0.0
        for index, box in boxes.items():
            center_x, center_y = box.center
            relation = classify_row(y - center_y, self._threshold_for(box))
            if relation is not RowRelation.SAME:
                continue
            offset = center_x - x
            if offset < 0:
                continue
            if best_same is None or offset < best_offset:
                best_same = index
                best_offset = offset
        if best_same is not None:
            return self._final_index(best_same, dragged, count, after=False)

        for anchor in (0, count - 1):
            box = self._box_of(anchor)
            if box is not None:
                boxes[anchor] = box

        pointer = (x, y)
        ordered = sorted(boxes)
        nearest = ordered[0]
        nearest_d2 = dist2(boxes[nearest].center, pointer)
        for index in ordered[1:]:
            d2 = dist2(boxes[index].center, pointer)
            if d2 < nearest_d2:
                nearest = index
                nearest_d2 = d2

        if nearest == 0:
            return 1
        if nearest == count - 1:
            return count - 2

        box = boxes[nearest]
        center_x, center_y = box.center
        relation = classify_row(y - center_y, self._threshold_for(box))
        if relation is RowRelation.SAME:
            after = x > center_x
        else:
            after = relation is RowRelation.ABOVE
        return self._final_index(nearest, dragged, count, after=after)

    def _threshold_for(self, box: Rect) -> float:
        if self.row_height_threshold is not None:
            return self.row_height_threshold
        return box.height

    @staticmethod
    def _final_index(neighbor: int, dragged: int, count: int, *, after: bool) -> int:
        # Indices are pre-removal; removing the dragged item first shifts every
        # later neighbor one slot left.
        if after:
            target = neighbor + 1 if neighbor < dragged else neighbor
        else:
            target = neighbor if neighbor < dragged else neighbor - 1
        return max(1, min(count - 2, target))
