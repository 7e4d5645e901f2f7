"""Error taxonomy for the hue ordering engine."""

from __future__ import annotations


class HueOrderError(ValueError):
    """Base class for arrangement and scoring failures."""


class InvalidInputError(HueOrderError):
    """Raised when the item set cannot seed an arrangement."""


class PinnedItemError(HueOrderError):
    """Raised when a move would touch one of the two pinned slots."""


class UnknownItemError(HueOrderError, KeyError):
    """Raised when an item is not part of the current arrangement."""
