"""INI-backed settings for the hue viewer."""

from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, fields, replace
import logging
from pathlib import Path
import sys

from hue_core.palette import MAX_HUE_RING_SAMPLES, PALETTES
from hue_core.scoring import ScoringMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "hue_viewer.ini"
_LAYOUT_SECTION = "layout"
_DRAG_SECTION = "drag"
_EXERCISE_SECTION = "exercise"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _default_ini_path() -> Path:
    """
    Resolve the default INI path.

    - Frozen / EXE build: place ini next to the executable
    - Source run: place ini next to this package
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent / CONFIG_FILENAME

    return Path(__file__).resolve().parent / CONFIG_FILENAME


@dataclass(frozen=True)
class HueViewerSettings:
    # Layout
    tile_size: int = 40
    spacing: int = 6
    padding: int = 10
    pin_last_to_corner: bool = True

    # Drag tuning; ``None`` threshold means one tile height
    row_height_threshold: float | None = None
    hitbox_padding: float = 3.0

    # Exercise
    palette: str = "fm100"
    sample_count: int = 100
    scoring_mode: ScoringMode = ScoringMode.INVERSION
    seed: int | None = None

    def with_overrides(self, **overrides: object) -> "HueViewerSettings":
        known = {field.name for field in fields(self)}
        updates = {
            key: value
            for key, value in overrides.items()
            if key in known and value is not None
        }
        return replace(self, **updates)


class SettingsStore:
    """Reads and writes :class:`HueViewerSettings` from ``hue_viewer.ini``.

    Missing keys use defaults; malformed values are logged and replaced by the
    default so a hand-edited file never stops the app from starting.
    """

    DEFAULT_PATH = _default_ini_path()

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else self.DEFAULT_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> HueViewerSettings:
        defaults = HueViewerSettings()
        parser = ConfigParser(inline_comment_prefixes=(";", "#"))
        if self._path.exists():
            try:
                with self._path.open("r", encoding="utf-8") as handle:
                    parser.read_file(handle)
            except (OSError, Error):
                logger.warning("Could not read %s, using defaults", self._path, exc_info=True)
                return defaults

        palette = self._get_str(parser, _EXERCISE_SECTION, "palette", defaults.palette)
        if palette not in PALETTES:
            logger.warning("Unknown palette %r in %s, using %s", palette, self._path, defaults.palette)
            palette = defaults.palette

        mode_text = self._get_str(
            parser, _EXERCISE_SECTION, "scoring_mode", defaults.scoring_mode.value
        )
        try:
            scoring_mode = ScoringMode(mode_text.lower())
        except ValueError:
            logger.warning("Unknown scoring_mode %r in %s", mode_text, self._path)
            scoring_mode = defaults.scoring_mode

        return HueViewerSettings(
            tile_size=self._get_int(parser, _LAYOUT_SECTION, "tile_size", defaults.tile_size, minimum=4),
            spacing=self._get_int(parser, _LAYOUT_SECTION, "spacing", defaults.spacing, minimum=0),
            padding=self._get_int(parser, _LAYOUT_SECTION, "padding", defaults.padding, minimum=0),
            pin_last_to_corner=self._get_bool(
                parser, _LAYOUT_SECTION, "pin_last_to_corner", defaults.pin_last_to_corner
            ),
            row_height_threshold=self._get_optional_float(
                parser, _DRAG_SECTION, "row_height_threshold"
            ),
            hitbox_padding=self._get_float(
                parser, _DRAG_SECTION, "hitbox_padding", defaults.hitbox_padding
            ),
            palette=palette,
            sample_count=self._get_int(
                parser,
                _EXERCISE_SECTION,
                "sample_count",
                defaults.sample_count,
                minimum=2,
                maximum=MAX_HUE_RING_SAMPLES,
            ),
            scoring_mode=scoring_mode,
            seed=self._get_optional_int(parser, _EXERCISE_SECTION, "seed"),
        )

    def save(self, settings: HueViewerSettings) -> None:
        parser = ConfigParser()
        parser[_LAYOUT_SECTION] = {
            "tile_size": str(settings.tile_size),
            "spacing": str(settings.spacing),
            "padding": str(settings.padding),
            "pin_last_to_corner": "true" if settings.pin_last_to_corner else "false",
        }
        parser[_DRAG_SECTION] = {
            "row_height_threshold": ""
            if settings.row_height_threshold is None
            else f"{settings.row_height_threshold:g}",
            "hitbox_padding": f"{settings.hitbox_padding:g}",
        }
        parser[_EXERCISE_SECTION] = {
            "palette": settings.palette,
            "sample_count": str(settings.sample_count),
            "scoring_mode": settings.scoring_mode.value,
            "seed": "" if settings.seed is None else str(settings.seed),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as fp:
            parser.write(fp)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _get_str(parser: ConfigParser, section: str, option: str, fallback: str) -> str:
        value = parser.get(section, option, fallback="").strip()
        return value or fallback

    def _get_int(
        self,
        parser: ConfigParser,
        section: str,
        option: str,
        fallback: int,
        *,
        minimum: int,
        maximum: int | None = None,
    ) -> int:
        raw = parser.get(section, option, fallback="").strip()
        if not raw:
            return fallback
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Invalid integer %s.%s=%r in %s", section, option, raw, self._path)
            return fallback
        if value < minimum:
            logger.warning("%s.%s=%d is below %d in %s", section, option, value, minimum, self._path)
            return fallback
        if maximum is not None and value > maximum:
            logger.warning("%s.%s=%d is above %d in %s", section, option, value, maximum, self._path)
            return fallback
        return value

    def _get_float(
        self, parser: ConfigParser, section: str, option: str, fallback: float
    ) -> float:
        value = self._get_optional_float(parser, section, option)
        return fallback if value is None else value

    def _get_optional_float(
        self, parser: ConfigParser, section: str, option: str
    ) -> float | None:
        raw = parser.get(section, option, fallback="").strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Invalid number %s.%s=%r in %s", section, option, raw, self._path)
            return None
        if value < 0:
            logger.warning("%s.%s must not be negative in %s", section, option, self._path)
            return None
        return value

    def _get_optional_int(
        self, parser: ConfigParser, section: str, option: str
    ) -> int | None:
        raw = parser.get(section, option, fallback="").strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning("Invalid integer %s.%s=%r in %s", section, option, raw, self._path)
            return None

    def _get_bool(
        self, parser: ConfigParser, section: str, option: str, fallback: bool
    ) -> bool:
        raw = parser.get(section, option, fallback="").strip().lower()
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        if raw:
            logger.warning("Invalid boolean %s.%s=%r in %s", section, option, raw, self._path)
        return fallback
