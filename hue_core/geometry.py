"""Plain geometry helpers shared by hit-testing and insertion resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def expanded(self, padding: float) -> "Rect":
        if padding <= 0:
            return self
        return Rect(
            top=self.top - padding,
            left=self.left - padding,
            width=self.width + 2 * padding,
            height=self.height + 2 * padding,
        )


# Geometry query supplied by the presentation layer; ``None`` means the index
# has no box yet (layout not ready, or index outside the laid-out range).
BoxQuery = Callable[[int], Optional[Rect]]


def dist2(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy
