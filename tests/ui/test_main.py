import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

pytest.importorskip("PyQt5")

from hue_core.scoring import ScoringMode
from hue_viewer import main as hue_main


def test_command_line_overrides_ini(tmp_path):
    ini = tmp_path / "hue_viewer.ini"
    ini.write_text(
        "[exercise]\npalette = fm100\nseed = 4\nscoring_mode = inversion\n",
        encoding="utf-8",
    )
    args = hue_main.parse_args(
        ["--config", str(ini), "--palette", "hue_ring", "--scoring-mode", "circular"]
    )

    settings = hue_main.resolve_settings(args)

    assert settings.palette == "hue_ring"
    assert settings.scoring_mode is ScoringMode.CIRCULAR
    assert settings.seed == 4


def test_missing_config_uses_defaults(tmp_path):
    args = hue_main.parse_args(["--config", str(tmp_path / "absent.ini"), "--seed", "11"])

    settings = hue_main.resolve_settings(args)

    assert settings.palette == "fm100"
    assert settings.seed == 11
    assert settings.scoring_mode is ScoringMode.INVERSION


def test_debug_flag_and_log_level_env(monkeypatch):
    monkeypatch.setenv("HUE_VIEWER_LOG_LEVEL", "WARNING")

    args = hue_main.parse_args(["--debug"])

    assert args.debug
    assert args.log_level == "WARNING"


def test_rejects_unknown_palette():
    with pytest.raises(SystemExit):
        hue_main.parse_args(["--palette", "munsell"])


def test_log_file_sits_next_to_writable_script(tmp_path, monkeypatch):
    monkeypatch.setattr(hue_main.sys, "argv", [str(tmp_path / "hue-viewer")])

    assert hue_main.default_log_path() == str(tmp_path / hue_main.LOG_FILENAME)


def test_log_file_falls_back_to_working_directory(tmp_path, monkeypatch):
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setattr(
        hue_main.sys, "argv", [str(tmp_path / "missing-bin" / "hue-viewer")]
    )

    assert hue_main.default_log_path() == os.path.join(os.getcwd(), hue_main.LOG_FILENAME)
