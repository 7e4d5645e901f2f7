from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """One color sample.

    ``token`` is the identity that survives every reordering, ``rank`` is the
    sample's index in the canonical hue order and ``value`` is whatever the
    presentation layer needs to draw it (a ``#RRGGBB`` string for the bundled
    palettes). The engine only ever looks at ``token`` and ``rank``.
    """

    token: str
    rank: int
    value: str = ""

    def __repr__(self) -> str:
        return f"Item({self.token!r}, rank={self.rank})"
