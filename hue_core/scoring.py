"""Scoring of an arrangement against the canonical hue order.

Two measures are kept side by side:

* inversion score (primary): ``0..100``, 100 only for the canonical order.
* circular positional error (alternate): ``>= 0``, 0 only for the canonical
  order, distances measured around the hue wheel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Sequence

import numpy as np

from hue_core.errors import InvalidInputError
from hue_core.items import Item

logger = logging.getLogger(__name__)


class ScoringMode(str, Enum):
    INVERSION = "inversion"
    CIRCULAR = "circular"


class ScoreBand(str, Enum):
    SUPERIOR = "superior"
    NORMAL = "normal"
    SLIGHT = "slight deficiency"
    MODERATE = "moderate deficiency"
    SIGNIFICANT = "significant deficiency"


# Lower bound (inclusive) of each band, checked top-down.
BAND_THRESHOLDS: tuple[tuple[int, ScoreBand], ...] = (
    (95, ScoreBand.SUPERIOR),
    (90, ScoreBand.NORMAL),
    (70, ScoreBand.SLIGHT),
    (50, ScoreBand.MODERATE),
)


@dataclass(frozen=True)
class ScoreReport:
    mode: ScoringMode
    inversions: int
    max_inversions: int
    score: int
    band: ScoreBand
    circular_error: int

    @property
    def is_perfect(self) -> bool:
        return self.inversions == 0


def count_inversions(ranks: Sequence[int]) -> int:
    """Number of position pairs ``i < j`` with ``ranks[i] > ranks[j]``."""

    values = np.asarray(ranks, dtype=np.int64)
    if values.size < 2:
        return 0
    later_is_smaller = values[:, None] > values[None, :]
    return int(np.count_nonzero(np.triu(later_is_smaller, k=1)))


def max_inversions(count: int) -> int:
    return count * (count - 1) // 2


def inversion_score(arrangement: Sequence[Item]) -> int:
    """``round(100 * (1 - inversions / max_inversions))``, half rounded up."""

    count = len(arrangement)
    if count < 2:
        raise InvalidInputError("Scoring needs at least two items.")
    total = max_inversions(count)
    inversions = count_inversions([item.rank for item in arrangement])
    return _round_half_up_percent(total - inversions, total)


def circular_error(
    arrangement: Sequence[Item], canonical_values: Sequence[str]
) -> int:
    """Sum of per-position hue-wheel distances, matched by color value.

    Each sample is located in ``canonical_values`` by its ``value`` (first
    match wins), so two samples that share a value are both measured against
    the first occurrence.
    """

    count = len(arrangement)
    if count == 0:
        return 0
    first_index: dict[str, int] = {}
    for index, value in enumerate(canonical_values):
        first_index.setdefault(value, index)

    try:
        correct = np.fromiter(
            (first_index[item.value] for item in arrangement),
            dtype=np.int64,
            count=count,
        )
    except KeyError as exc:
        raise InvalidInputError(
            f"Color {exc.args[0]!r} is not part of the canonical order."
        ) from None

    linear = np.abs(np.arange(count, dtype=np.int64) - correct)
    circular = np.minimum(linear, count - linear)
    return int(circular.sum())


def classify_score(score: int) -> ScoreBand:
    for lower_bound, band in BAND_THRESHOLDS:
        if score >= lower_bound:
            return band
    return ScoreBand.SIGNIFICANT


def evaluate(
    arrangement: Sequence[Item],
    canonical: Sequence[Item],
    mode: ScoringMode = ScoringMode.INVERSION,
) -> ScoreReport:
    """Score ``arrangement`` under both measures.

    ``mode`` only records which measure the caller treats as the headline
    number; both are always computed.
    """

    count = len(arrangement)
    if count < 2:
        raise InvalidInputError("Scoring needs at least two items.")
    if len(canonical) != count:
        raise InvalidInputError(
            f"Arrangement has {count} items but canonical order has {len(canonical)}."
        )

    inversions = count_inversions([item.rank for item in arrangement])
    total = max_inversions(count)
    score = _round_half_up_percent(total - inversions, total)
    error = circular_error(arrangement, [item.value for item in canonical])
    report = ScoreReport(
        mode=ScoringMode(mode),
        inversions=inversions,
        max_inversions=total,
        score=score,
        band=classify_score(score),
        circular_error=error,
    )
    logger.debug(
        "Scored %d items: %d/%d inversions, score %d (%s), circular error %d",
        count,
        inversions,
        total,
        score,
        report.band.value,
        error,
    )
    return report


def _round_half_up_percent(numerator: int, denominator: int) -> int:
    # floor(100 * n / d + 1/2) in integers, so exact halves never drift.
    return (200 * numerator + denominator) // (2 * denominator)
