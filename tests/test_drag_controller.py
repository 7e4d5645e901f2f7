import pytest

from hue_core.drag_controller import (
    DragReorderController,
    DragState,
    RowRelation,
    classify_row,
)
from hue_core.geometry import Rect
from hue_core.items import Item
from hue_core.scoring import ScoreBand
from hue_core.sequence_store import SequenceStore

TILE = 40.0
PITCH = 50.0


def _grid(columns: int, count: int):
    """Tiles of 40px on a 50px pitch, wrapping every *columns* tiles."""

    def box_of(index: int) -> Rect | None:
        if not 0 <= index < count:
            return None
        row, column = divmod(index, columns)
        return Rect(top=row * PITCH, left=column * PITCH, width=TILE, height=TILE)

    return box_of


def _center(index: int, columns: int) -> tuple[float, float]:
    row, column = divmod(index, columns)
    return column * PITCH + TILE / 2, row * PITCH + TILE / 2


def _store(ranks: list[int]) -> SequenceStore:
    items = [Item(token=f"t{rank}", rank=rank, value=f"v{rank}") for rank in range(len(ranks))]
    store = SequenceStore()
    store.initialize(items, [items[rank] for rank in ranks[1:-1]])
    return store


@pytest.fixture
def row_store():
    return _store([0, 3, 1, 4, 2, 5])


@pytest.fixture
def row_controller(row_store):
    return DragReorderController(row_store, _grid(columns=10, count=6))


def test_gesture_start_on_interior_item_enters_dragging(row_store, row_controller):
    item = row_store.item_at(1)

    assert row_controller.on_gesture_start(item, _center(1, 10)) is True
    assert row_controller.state is DragState.DRAGGING
    assert row_controller.session.item is item
    assert row_controller.session.origin_index == 1


@pytest.mark.parametrize("index", [0, 5])
def test_gesture_start_on_pinned_item_stays_idle(row_store, row_controller, index):
    assert row_controller.on_gesture_start(row_store.item_at(index), (0.0, 0.0)) is False
    assert row_controller.state is DragState.IDLE
    assert row_controller.session is None


def test_gesture_start_on_unknown_item_is_ignored(row_controller):
    assert row_controller.on_gesture_start(Item("ghost", 2), (0.0, 0.0)) is False
    assert row_controller.on_gesture_start(None, (0.0, 0.0)) is False
    assert row_controller.state is DragState.IDLE


def test_second_gesture_start_is_ignored_while_dragging(row_store, row_controller):
    first = row_store.item_at(1)
    second = row_store.item_at(2)
    row_controller.on_gesture_start(first, (70.0, 20.0))

    assert row_controller.on_gesture_start(second, (120.0, 20.0)) is False
    assert row_controller.session.item is first


def test_idle_calls_are_no_ops(row_store, row_controller):
    before = row_store.current_arrangement()

    assert row_controller.resolve_insertion_index(100.0, 20.0) is None
    assert row_controller.on_gesture_move((100.0, 20.0)) is None
    assert row_controller.on_gesture_end() is None
    assert row_controller.on_gesture_cancel() is False
    assert row_store.current_arrangement() == before


def test_same_row_inserts_before_first_tile_right_of_pointer(row_store, row_controller):
    item = row_store.item_at(1)
    row_controller.on_gesture_start(item, (70.0, 20.0))

    # Just past the center of index 3 (170): the next tile to the right is 4.
    assert row_controller.on_gesture_move((175.0, 20.0)) == 3
    assert row_store.index_of(item) == 3
    assert row_store.ranks() == [0, 1, 4, 3, 2, 5]


def test_pointer_left_of_midpoint_inserts_before_that_tile(row_store, row_controller):
    item = row_store.item_at(4)
    row_controller.on_gesture_start(item, (220.0, 20.0))

    assert row_controller.on_gesture_move((60.0, 20.0)) == 1
    assert row_store.ranks() == [0, 2, 3, 1, 4, 5]


def test_pointer_past_last_interior_tile_stops_before_pinned_end(row_store, row_controller):
    item = row_store.item_at(1)
    row_controller.on_gesture_start(item, (70.0, 20.0))

    assert row_controller.on_gesture_move((260.0, 20.0)) == 4
    assert row_store.ranks() == [0, 1, 4, 2, 3, 5]
    # Further right than the pinned tile still never lands after it.
    assert row_controller.on_gesture_move((400.0, 20.0)) == 4
    assert row_store.item_at(5).rank == 5


def test_move_to_own_slot_keeps_arrangement(row_store, row_controller):
    before = row_store.current_arrangement()
    row_controller.on_gesture_start(row_store.item_at(2), (120.0, 20.0))

    assert row_controller.on_gesture_move((110.0, 20.0)) == 2
    assert row_store.current_arrangement() == before


def test_cross_row_drag_lands_in_pointer_row():
    store = _store([0, 8, 1, 2, 3, 4, 5, 6, 7, 9])
    controller = DragReorderController(store, _grid(columns=4, count=10))
    item = store.item_at(1)
    controller.on_gesture_start(item, _center(1, 4))

    # Second row, between the centers of index 4 (20) and 5 (70) plus a bit.
    assert controller.on_gesture_move((75.0, 70.0)) == 5
    assert store.index_of(item) == 5


def test_end_of_row_uses_nearest_tile_and_inserts_after_it():
    store = _store([0, 8, 1, 2, 3, 4, 5, 6, 7, 9])
    controller = DragReorderController(store, _grid(columns=4, count=10))
    item = store.item_at(1)
    controller.on_gesture_start(item, _center(1, 4))

    # Right of index 7, the last tile of the second row.
    assert controller.on_gesture_move((195.0, 70.0)) == 7
    assert store.ranks() == [0, 1, 2, 3, 4, 5, 6, 8, 7, 9]


def test_ragged_last_row_near_pinned_tile_targets_slot_before_it():
    store = _store([0, 8, 1, 2, 3, 4, 5, 6, 7, 9])
    controller = DragReorderController(store, _grid(columns=4, count=10))
    item = store.item_at(1)
    controller.on_gesture_start(item, _center(1, 4))

    assert controller.on_gesture_move((75.0, 125.0)) == 8
    assert store.ranks() == [0, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert store.is_solved()


def test_pointer_above_grid_resolves_to_first_interior_slot():
    store = _store([0, 2, 3, 1, 4])
    controller = DragReorderController(store, _grid(columns=10, count=5))
    item = store.item_at(3)
    controller.on_gesture_start(item, _center(3, 10))

    assert controller.on_gesture_move((20.0, -100.0)) == 1
    assert store.ranks() == [0, 1, 2, 3, 4]


def test_tile_below_pointer_receives_item_in_front_of_it():
    store = _store([0, 8, 1, 2, 3, 4, 5, 6, 7, 9])
    controller = DragReorderController(store, _grid(columns=4, count=10))
    item = store.item_at(8)
    controller.on_gesture_start(item, _center(8, 4))

    # Above the grid, nearest to index 2 whose row lies below the pointer.
    assert controller.resolve_insertion_index(120.0, -30.0) == 2


def test_resolution_is_deterministic_with_ties_to_lowest_index():
    store = _store([0, 8, 1, 2, 3, 4, 5, 6, 7, 9])
    controller = DragReorderController(
        store, _grid(columns=4, count=10), row_height_threshold=1000.0
    )
    controller.on_gesture_start(store.item_at(2), _center(2, 4))

    # Index 1 and index 5 share a center x; the lower index wins.
    results = {controller.resolve_insertion_index(65.0, 70.0) for _ in range(5)}
    assert results == {1}


def test_fallback_tie_prefers_lowest_index():
    store = _store([0, 1, 2, 4, 3, 5])
    controller = DragReorderController(store, _grid(columns=10, count=6))
    controller.on_gesture_start(store.item_at(3), _center(3, 10))

    # Equidistant from index 1 (70) and 2 (120), far below the row.
    assert controller.resolve_insertion_index(95.0, 200.0) == 2


def test_single_interior_item_resolves_to_its_own_slot():
    store = _store([0, 1, 2])
    controller = DragReorderController(store, _grid(columns=10, count=3))
    controller.on_gesture_start(store.item_at(1), (70.0, 20.0))

    assert controller.resolve_insertion_index(500.0, 500.0) == 1
    assert controller.on_gesture_move((0.0, 0.0)) == 1


def test_missing_layout_is_a_no_op(row_store):
    controller = DragReorderController(row_store, lambda index: None)
    before = row_store.current_arrangement()
    controller.on_gesture_start(row_store.item_at(2), (0.0, 0.0))

    assert controller.resolve_insertion_index(100.0, 20.0) is None
    assert controller.on_gesture_move((100.0, 20.0)) is None
    assert controller.state is DragState.DRAGGING
    assert row_store.current_arrangement() == before


def test_layout_can_be_swapped_mid_drag(row_store):
    controller = DragReorderController(row_store, lambda index: None)
    item = row_store.item_at(1)
    controller.on_gesture_start(item, (70.0, 20.0))
    controller.set_layout(_grid(columns=10, count=6))

    assert controller.on_gesture_move((175.0, 20.0)) == 3


def test_cancel_restores_pre_drag_arrangement(row_store, row_controller):
    before = row_store.current_arrangement()
    item = row_store.item_at(2)
    row_controller.on_gesture_start(item, (120.0, 20.0))
    for pointer in [(260.0, 20.0), (10.0, 20.0), (175.0, 20.0), (60.0, 20.0)]:
        row_controller.on_gesture_move(pointer)
    assert row_store.current_arrangement() != before

    assert row_controller.on_gesture_cancel() is True
    assert row_store.current_arrangement() == before
    assert row_controller.state is DragState.IDLE

    assert row_controller.on_gesture_cancel() is False
    assert row_store.current_arrangement() == before


def test_gesture_end_commits_and_reports_score(row_store):
    reports = []
    controller = DragReorderController(
        row_store, _grid(columns=10, count=6), on_scored=reports.append
    )
    controller.on_gesture_start(row_store.item_at(3), (170.0, 20.0))
    controller.on_gesture_move((70.0, 20.0))

    report = controller.on_gesture_end()

    assert row_store.ranks() == [0, 4, 3, 1, 2, 5]
    assert controller.state is DragState.IDLE
    assert reports == [report]
    assert report.inversions == 5
    assert report.max_inversions == 15
    assert report.score == 67
    assert report.band is ScoreBand.MODERATE
    assert controller.on_gesture_cancel() is False


def test_drag_sequence_never_disturbs_pinned_items(row_store, row_controller):
    first, last = row_store.item_at(0), row_store.item_at(5)
    pointers = [(-50.0, -50.0), (300.0, 20.0), (20.0, 20.0), (270.0, 20.0), (150.0, 300.0)]
    for index in (1, 2, 3, 4):
        row_controller.on_gesture_start(row_store.item_at(index), _center(index, 10))
        for pointer in pointers:
            row_controller.on_gesture_move(pointer)
            assert row_store.item_at(0) is first
            assert row_store.item_at(5) is last
        row_controller.on_gesture_end()
    assert len(set(row_store.current_arrangement())) == 6


def test_pick_index_respects_hitbox_padding(row_store):
    tight = DragReorderController(row_store, _grid(columns=10, count=6))
    padded = DragReorderController(row_store, _grid(columns=10, count=6), hitbox_padding=3.0)

    assert tight.pick_index(70.0, 20.0) == 1
    assert tight.pick_index(93.0, 20.0) is None
    assert padded.pick_index(93.0, 20.0) == 1
    assert padded.pick_index(97.0, 20.0) == 2


def test_pick_index_never_returns_pinned_tiles(row_store):
    controller = DragReorderController(row_store, _grid(columns=10, count=6), hitbox_padding=10.0)

    assert controller.pick_index(20.0, 20.0) is None
    assert controller.pick_index(270.0, 20.0) is None


@pytest.mark.parametrize(
    ("dy", "relation"),
    [
        (0.0, RowRelation.SAME),
        (39.9, RowRelation.SAME),
        (-39.9, RowRelation.SAME),
        (40.0, RowRelation.ABOVE),
        (-40.0, RowRelation.BELOW),
    ],
)
def test_classify_row(dy, relation):
    assert classify_row(dy, 40.0) is relation
