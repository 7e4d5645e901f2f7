"""Entry point for the hue viewer."""

import argparse
import logging
import os
import sys
from pathlib import Path

from hue_core.palette import PALETTES
from hue_core.scoring import ScoringMode
from hue_viewer.config import HueViewerSettings, SettingsStore
from hue_viewer.main_window import HueViewerApp, HueViewerWindow

logger = logging.getLogger(__name__)

LOG_FILENAME = "hue_viewer_log.txt"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hue ordering exercise")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings INI path. Defaults to hue_viewer.ini next to the application.",
    )
    parser.add_argument(
        "--palette",
        choices=PALETTES,
        default=None,
        help="Color samples to arrange (overrides the INI setting).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Shuffle seed for reproducible runs (overrides the INI setting).",
    )
    parser.add_argument(
        "--scoring-mode",
        choices=[mode.value for mode in ScoringMode],
        default=None,
        help="Headline score shown after submitting (overrides the INI setting).",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("HUE_VIEWER_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to HUE_VIEWER_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("HUE_VIEWER_LOG_PATH"),
        help=(
            "Optional log file path. Defaults to hue_viewer_log.txt next to the "
            "executable."
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    return parser.parse_args(argv)


def default_log_path() -> str:
    """hue_viewer_log.txt next to the launched script, or in the working
    directory when that folder is not writable (e.g. a system-wide bin/)."""

    base_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
    if not os.access(base_dir, os.W_OK):
        base_dir = os.getcwd()
    return os.path.join(base_dir, LOG_FILENAME)


def configure_logging(log_level_name: str, log_path: str | None) -> str:
    resolved_level_name = log_level_name.upper()
    log_level = getattr(logging, resolved_level_name, logging.INFO)

    if not log_path:
        log_path = default_log_path()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    return log_path


def resolve_settings(args: argparse.Namespace) -> HueViewerSettings:
    store = SettingsStore(args.config)
    settings = store.load()
    logger.info("Using settings from %s", store.path)
    return settings.with_overrides(
        palette=args.palette,
        seed=args.seed,
        scoring_mode=ScoringMode(args.scoring_mode) if args.scoring_mode else None,
    )


def main() -> None:
    args = parse_args()
    log_level_name = "DEBUG" if args.debug else args.log_level
    log_path = configure_logging(log_level_name, args.log_file)
    logger.info("Starting hue viewer (log level %s, log file %s)", log_level_name.upper(), log_path)
    settings = resolve_settings(args)

    app = HueViewerApp(sys.argv)
    window = HueViewerWindow(settings)
    app.window = window
    window.show()

    def cleanup() -> None:
        try:
            if window:
                window.close()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Unexpected error while closing window")

    app.aboutToQuit.connect(cleanup)
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
