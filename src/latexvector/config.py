from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from latexvector.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LATEXVECTOR_"


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _to_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}", exc)
    if value < 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    # Quiet period between a text change and extraction.
    debounce_seconds: float = 0.4
    # How long the "Copied" feedback stays up.
    toast_seconds: float = 1.5
    poll_interval: float = 0.5

    # Export rendering, sizes in points.
    font_size: float = 16.0
    render_scale: float = 1.5
    padding: float = 10.0
    default_width: float = 500.0
    default_height: float = 200.0
    fontset: str = "stix"

    output_dir: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, env_path: Optional[Path] = None) -> "Settings":
        if env_path is not None:
            load_dotenv(env_path, override=False)
        else:
            load_dotenv(override=False)

        output_raw = _env("OUTPUT_DIR")
        level = (_env("LOG_LEVEL") or cls.log_level).upper()
        if logging.getLevelName(level) == f"Level {level}":
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {level!r}")

        return cls(
            debounce_seconds=_to_float("DEBOUNCE", cls.debounce_seconds),
            toast_seconds=_to_float("TOAST_SECONDS", cls.toast_seconds),
            poll_interval=_to_float("POLL_INTERVAL", cls.poll_interval),
            font_size=_to_float("FONT_SIZE", cls.font_size),
            render_scale=_to_float("RENDER_SCALE", cls.render_scale),
            padding=_to_float("PADDING", cls.padding),
            default_width=_to_float("DEFAULT_WIDTH", cls.default_width),
            default_height=_to_float("DEFAULT_HEIGHT", cls.default_height),
            fontset=_env("FONTSET") or cls.fontset,
            output_dir=Path(output_raw).expanduser() if output_raw else None,
            log_level=level,
        )

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the non-``None`` values in ``changes`` applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)
