"""Color sample sets and the shuffle used to present them."""

from __future__ import annotations

import colorsys
import random
from typing import List, Sequence, TypeVar

from hue_core.errors import InvalidInputError
from hue_core.items import Item

T = TypeVar("T")

# Approximation of the FM100 caps as one continuous walk around the hue wheel,
# red through yellow, green, cyan, blue and purple back towards red.
FM100_COLORS: tuple[str, ...] = (
    "#FF0000", "#FF1A00", "#FF2E00", "#FF4000", "#FF5000",
    "#FF5E00", "#FF6B00", "#FF7800", "#FF8300", "#FF8E00",
    "#FF9900", "#FFA300", "#FFAD00", "#FFB600", "#FFC000",
    "#FFC900", "#FFD300", "#FFDC00", "#FFE500", "#FFEE00",
    "#FFF700", "#FFFF00", "#F7FF00", "#EEFF00", "#E5FF00",
    "#DCFF00", "#D3FF00", "#C9FF00", "#C0FF00", "#B6FF00",
    "#ADFF00", "#A3FF00", "#99FF00", "#8EFF00", "#83FF00",
    "#78FF00", "#6BFF00", "#5EFF00", "#50FF00", "#40FF00",
    "#2EFF00", "#1AFF00", "#00FF00", "#00FF1A", "#00FF2E",
    "#00FF40", "#00FF50", "#00FF5E", "#00FF6B", "#00FF78",
    "#00FF83", "#00FF8E", "#00FF99", "#00FFA3", "#00FFAD",
    "#00FFB6", "#00FFC0", "#00FFC9", "#00FFD3", "#00FFDC",
    "#00FFE5", "#00FFEE", "#00FFF7", "#00FFFF", "#00F7FF",
    "#00EEFF", "#00E5FF", "#00DCFF", "#00D3FF", "#00C9FF",
    "#00C0FF", "#00B6FF", "#00ADFF", "#00A3FF", "#0099FF",
    "#008EFF", "#0083FF", "#0078FF", "#006BFF", "#005EFF",
    "#0050FF", "#0040FF", "#002EFF", "#001AFF", "#0000FF",
    "#1A00FF", "#2E00FF", "#4000FF", "#5000FF", "#5E00FF",
    "#6B00FF", "#7800FF", "#8300FF", "#8E00FF", "#9900FF",
    "#A300FF", "#AD00FF", "#B600FF", "#C000FF", "#C900FF",
    "#D300FF", "#DC00FF", "#E500FF", "#EE00FF", "#F700FF",
    "#FF00F7", "#FF00EE", "#FF00E5", "#FF00DC", "#FF00D3",
    "#FF00C9", "#FF00C0", "#FF00B6", "#FF00AD", "#FF00A3",
    "#FF0099", "#FF008E", "#FF0083", "#FF0078", "#FF006B",
)

PALETTES = ("fm100", "hue_ring")

# Keeps neighbouring ring samples at least four 8-bit steps apart.
MAX_HUE_RING_SAMPLES = 360


def hue_ring_colors(count: int = 100) -> list[str]:
    """Fully saturated samples at evenly spaced hues, starting at red."""

    if count < 2:
        raise InvalidInputError(f"A hue ring needs at least two samples, got {count}.")
    if count > MAX_HUE_RING_SAMPLES:
        raise InvalidInputError(
            f"A hue ring holds at most {MAX_HUE_RING_SAMPLES} distinct samples, got {count}."
        )
    colors: list[str] = []
    for index in range(count):
        hue = index / count
        red, green, blue = colorsys.hls_to_rgb(hue, 0.5, 1.0)
        colors.append(
            "#{:02X}{:02X}{:02X}".format(
                int(round(red * 255)), int(round(green * 255)), int(round(blue * 255))
            )
        )
    return colors


def palette_colors(name: str, sample_count: int = 100) -> list[str]:
    if name == "fm100":
        return list(FM100_COLORS)
    if name == "hue_ring":
        return hue_ring_colors(sample_count)
    raise InvalidInputError(
        f"Unknown palette {name!r}. Supported palettes: {', '.join(PALETTES)}"
    )


def build_items(colors: Sequence[str]) -> List[Item]:
    return [
        Item(token=f"color-{index}", rank=index, value=color)
        for index, color in enumerate(colors)
    ]


def fisher_yates(values: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a shuffled copy of *values*."""

    rng = rng or random.Random()
    shuffled = list(values)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffled_interior(items: Sequence[Item], rng: random.Random | None = None) -> list[Item]:
    """Shuffle every item except the lowest and highest ranked ones."""

    if len(items) < 2:
        raise InvalidInputError(f"At least two items are required, got {len(items)}.")
    ordered = sorted(items, key=lambda item: item.rank)
    return fisher_yates(ordered[1:-1], rng)
