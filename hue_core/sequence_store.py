"""Ordered, identity-preserving arrangement with two pinned end slots."""

from __future__ import annotations

import logging
from typing import Sequence

from hue_core.errors import InvalidInputError, PinnedItemError, UnknownItemError
from hue_core.items import Item

logger = logging.getLogger(__name__)


class SequenceStore:
    """Owns the canonical order and the live arrangement of a session.

    The first and last slots hold the rank ``0`` and rank ``N-1`` items for
    the whole session. Every mutation goes through :meth:`move_item`, which
    validates before touching the list, so the arrangement is always a full
    permutation of the item set.
    """

    def __init__(self) -> None:
        self._canonical: tuple[Item, ...] = ()
        self._arrangement: list[Item] = []

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def initialize(
        self,
        items: Sequence[Item],
        interior_order: Sequence[Item] | None = None,
    ) -> None:
        """Seed the store from ``items``.

        ``interior_order`` is the externally shuffled order of every item
        except the two pinned ones. When omitted the interior keeps the order
        in which it appears in ``items``.
        """

        items = list(items)
        if len(items) < 2:
            raise InvalidInputError(
                f"At least two items are required, got {len(items)}."
            )

        tokens = [item.token for item in items]
        if len(set(tokens)) != len(tokens):
            raise InvalidInputError("Item tokens must be unique.")

        ranks = sorted(item.rank for item in items)
        if ranks != list(range(len(items))):
            raise InvalidInputError(
                f"Canonical ranks must be exactly 0..{len(items) - 1}."
            )

        canonical = tuple(sorted(items, key=lambda item: item.rank))
        first, last = canonical[0], canonical[-1]
        interior_set = set(canonical[1:-1])

        if interior_order is None:
            interior = [item for item in items if item is not first and item is not last]
        else:
            interior = list(interior_order)
            if len(interior) != len(interior_set) or set(interior) != interior_set:
                raise InvalidInputError(
                    "Interior order must be a permutation of the non-pinned items."
                )

        self._canonical = canonical
        self._arrangement = [first, *interior, last]
        logger.debug("Seeded arrangement with %d items", len(self._arrangement))

    def clear(self) -> None:
        self._canonical = ()
        self._arrangement = []

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._arrangement)

    def __contains__(self, item: object) -> bool:
        return item in self._arrangement

    @property
    def is_initialized(self) -> bool:
        return bool(self._arrangement)

    def current_arrangement(self) -> tuple[Item, ...]:
        return tuple(self._arrangement)

    def canonical_order(self) -> tuple[Item, ...]:
        return self._canonical

    def item_at(self, index: int) -> Item:
        return self._arrangement[index]

    def index_of(self, item: Item) -> int:
        try:
            return self._arrangement.index(item)
        except ValueError:
            raise UnknownItemError(item) from None

    def is_pinned(self, item: Item) -> bool:
        if not self._canonical:
            return False
        return item == self._canonical[0] or item == self._canonical[-1]

    def is_pinned_index(self, index: int) -> bool:
        return index == 0 or index == len(self._arrangement) - 1

    def interior_indices(self) -> range:
        return range(1, max(1, len(self._arrangement) - 1))

    def is_solved(self) -> bool:
        return tuple(self._arrangement) == self._canonical

    def ranks(self) -> list[int]:
        return [item.rank for item in self._arrangement]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def move_item(self, item: Item, target_index: int) -> bool:
        """Move ``item`` so that it ends up at ``target_index``.

        Intermediate items shift by one. Returns ``False`` when the item is
        already at ``target_index``.
        """

        current = self.index_of(item)
        count = len(self._arrangement)
        if self.is_pinned(item):
            raise PinnedItemError(f"{item!r} is pinned and cannot move.")
        if not 0 <= target_index < count:
            raise IndexError(
                f"Target index {target_index} is out of range for {count} items."
            )
        if self.is_pinned_index(target_index):
            raise PinnedItemError(
                f"Slot {target_index} is pinned and cannot receive {item!r}."
            )
        if current == target_index:
            return False

        del self._arrangement[current]
        self._arrangement.insert(target_index, item)
        return True

