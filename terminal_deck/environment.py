"""Environment-supplied startup defaults, read once and passed around immutably."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .models import MAX_FRAME_WIDTH, MIN_FRAME_WIDTH

DEFAULT_FRAME_WIDTH = 120
DEFAULT_BANNER_PATH = "presentations/banner.txt"
DEFAULT_TITLE = "Terminal Deck"

# neon palette
DEFAULT_ACCENT = "\x1b[38;5;214m"
DEFAULT_DIM = "\x1b[38;5;238m"
DEFAULT_GLOW = "\x1b[38;5;51m"

_ESCAPE_SPELLINGS = ("\\x1b", "\\x1B", "\\033", "\\u001b", "\\u001B", "\\e")


def decode_color_code(value: str) -> str:
    """Turn textual spellings of the ESC byte (``\\x1b``, ``\\033``, ``\\e``) into ESC."""
    text = value.strip()
    for spelling in _ESCAPE_SPELLINGS:
        text = text.replace(spelling, "\x1b")
    return text


@dataclass(frozen=True)
class EnvironmentDefaults:
    frame_width: int = DEFAULT_FRAME_WIDTH
    accent: str = DEFAULT_ACCENT
    dim: str = DEFAULT_DIM
    glow: str = DEFAULT_GLOW
    banner_path: Path = Path(DEFAULT_BANNER_PATH)
    title: str = DEFAULT_TITLE
    theme_name: Optional[str] = None


def parse_frame_width(value: Any, *, source: str) -> int:
    """Validate a frame width coming from the CLI or the environment."""
    try:
        width = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source} must be an integer (got {value!r})")
    if width < MIN_FRAME_WIDTH or width > MAX_FRAME_WIDTH:
        raise ConfigurationError(
            f"{source} must be between {MIN_FRAME_WIDTH} and {MAX_FRAME_WIDTH} (got {width})"
        )
    return width


def load_environment_defaults(environ: Optional[Mapping[str, str]] = None) -> EnvironmentDefaults:
    """Read defaults from the process environment.

    When ``environ`` is omitted the process environment is used after a `.env`
    file (if any) has been merged into it without overriding existing values.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    raw_width = environ.get("FRAME_WIDTH")
    if raw_width and raw_width.strip():
        frame_width = parse_frame_width(raw_width, source="FRAME_WIDTH")
    else:
        frame_width = DEFAULT_FRAME_WIDTH

    return EnvironmentDefaults(
        frame_width=frame_width,
        accent=decode_color_code(environ.get("COLOR_ACCENT") or DEFAULT_ACCENT),
        dim=decode_color_code(environ.get("COLOR_DIM") or DEFAULT_DIM),
        glow=decode_color_code(environ.get("COLOR_GLOW") or DEFAULT_GLOW),
        banner_path=Path(environ.get("DEFAULT_BANNER_PATH") or DEFAULT_BANNER_PATH).expanduser(),
        title=environ.get("PRESENTATION_TITLE") or DEFAULT_TITLE,
        theme_name=(environ.get("PRESENTATION_THEME") or "").strip() or None,
    )
