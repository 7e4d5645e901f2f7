"""Wrapping grid geometry for the tile container."""

from __future__ import annotations

from dataclasses import dataclass
import math

from hue_core.geometry import Rect


@dataclass(frozen=True)
class TileGridLayout:
    """Row-major grid of square tiles that wraps at ``columns``.

    With ``pin_last_to_corner`` the final slot is drawn in the bottom-right
    cell regardless of how ragged the last row is, matching the physical
    test tray where the last cap sits at the far end.
    """

    count: int
    columns: int
    tile_size: float = 40.0
    spacing: float = 6.0
    padding: float = 10.0
    pin_last_to_corner: bool = True

    @classmethod
    def for_width(
        cls,
        count: int,
        width: float,
        *,
        tile_size: float = 40.0,
        spacing: float = 6.0,
        padding: float = 10.0,
        pin_last_to_corner: bool = True,
    ) -> "TileGridLayout":
        pitch = tile_size + spacing
        usable = width - 2 * padding + spacing
        columns = max(1, int(usable // pitch))
        return cls(
            count=count,
            columns=columns,
            tile_size=tile_size,
            spacing=spacing,
            padding=padding,
            pin_last_to_corner=pin_last_to_corner,
        )

    @property
    def pitch(self) -> float:
        return self.tile_size + self.spacing

    @property
    def rows(self) -> int:
        if self.count <= 0:
            return 0
        return math.ceil(self.count / self.columns)

    def cell_of(self, index: int) -> tuple[int, int] | None:
        if not 0 <= index < self.count:
            return None
        if self.pin_last_to_corner and self.count > 1 and index == self.count - 1:
            return self.rows - 1, self.columns - 1
        return divmod(index, self.columns)

    def box_of(self, index: int) -> Rect | None:
        cell = self.cell_of(index)
        if cell is None:
            return None
        row, column = cell
        return Rect(
            top=self.padding + row * self.pitch,
            left=self.padding + column * self.pitch,
            width=self.tile_size,
            height=self.tile_size,
        )

    def content_size(self) -> tuple[float, float]:
        if self.count <= 0:
            return 2 * self.padding, 2 * self.padding
        width = 2 * self.padding + self.columns * self.pitch - self.spacing
        height = 2 * self.padding + self.rows * self.pitch - self.spacing
        return width, height
