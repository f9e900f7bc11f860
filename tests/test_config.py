import os
from pathlib import Path

import pytest

from latexvector.config import Settings
from latexvector.exceptions import ConfigError

ENV_KEYS = (
    "DEBOUNCE", "TOAST_SECONDS", "POLL_INTERVAL", "FONT_SIZE", "RENDER_SCALE",
    "PADDING", "DEFAULT_WIDTH", "DEFAULT_HEIGHT", "FONTSET", "OUTPUT_DIR", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv("LATEXVECTOR_" + key, raising=False)
    yield
    # load_dotenv writes straight into os.environ.
    for key in ENV_KEYS:
        os.environ.pop("LATEXVECTOR_" + key, None)


def test_defaults(tmp_path):
    settings = Settings.from_env(env_path=tmp_path / "missing.env")
    assert settings.debounce_seconds == 0.4
    assert settings.toast_seconds == 1.5
    assert (settings.default_width, settings.default_height) == (500.0, 200.0)
    assert settings.output_dir is None
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LATEXVECTOR_DEBOUNCE", "0.25")
    monkeypatch.setenv("LATEXVECTOR_FONTSET", "dejavusans")
    monkeypatch.setenv("LATEXVECTOR_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("LATEXVECTOR_LOG_LEVEL", "debug")

    settings = Settings.from_env(env_path=tmp_path / "missing.env")

    assert settings.debounce_seconds == 0.25
    assert settings.fontset == "dejavusans"
    assert settings.output_dir == tmp_path / "out"
    assert settings.log_level == "DEBUG"


def test_env_file_is_loaded(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("LATEXVECTOR_TOAST_SECONDS=3\n# comment\n", encoding="utf-8")

    settings = Settings.from_env(env_path=env_file)
    assert settings.toast_seconds == 3.0


@pytest.mark.parametrize("key, value", [
    ("DEBOUNCE", "soon"),
    ("PADDING", "-1"),
    ("LOG_LEVEL", "chatty"),
])
def test_bad_values_raise_config_error(monkeypatch, tmp_path, key, value):
    monkeypatch.setenv("LATEXVECTOR_" + key, value)
    with pytest.raises(ConfigError):
        Settings.from_env(env_path=tmp_path / "missing.env")


def test_with_overrides_skips_none():
    settings = Settings().with_overrides(poll_interval=None, output_dir=Path("/tmp/x"))
    assert settings.poll_interval == 0.5
    assert settings.output_dir == Path("/tmp/x")
