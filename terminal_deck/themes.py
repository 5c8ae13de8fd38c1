"""Theme catalog and resolution (theme file > built-in name > environment)."""
from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from logging_utils import get_logger

from .environment import EnvironmentDefaults, decode_color_code
from .errors import ConfigurationError
from .models import Theme

logger = get_logger(__name__)

DEFAULT_THEME_NAME = "default"

BUILTIN_THEMES: Dict[str, Theme] = {
    "neon": Theme(name="neon", accent="\x1b[38;5;214m", dim="\x1b[38;5;238m", glow="\x1b[38;5;51m"),
    "amber": Theme(name="amber", accent="\x1b[38;5;178m", dim="\x1b[38;5;94m", glow="\x1b[38;5;221m"),
    "arctic": Theme(name="arctic", accent="\x1b[38;5;195m", dim="\x1b[38;5;250m", glow="\x1b[38;5;117m"),
}

_REQUIRED_KEYS = ("accent", "dim", "glow")


def _parse_theme_document(path: Path, content: str) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(content)
        if suffix == ".json":
            return json.loads(content)
        return tomllib.loads(content)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid theme file {path}: {exc}") from exc


def load_theme_file(path: Path | str) -> Theme:
    """Load a theme with ``accent``/``dim``/``glow`` and an optional ``name``.

    Without a ``name`` key the file stem is used (``nebula.toml`` -> ``nebula``).
    """
    theme_path = Path(path).expanduser()
    try:
        content = theme_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Theme file could not be read: {theme_path} ({exc})") from exc

    data = _parse_theme_document(theme_path, content)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Theme file must be a mapping: {theme_path}")

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigurationError(f"Theme file {theme_path} is missing required keys: {', '.join(missing)}")
    invalid = [key for key in _REQUIRED_KEYS if not isinstance(data[key], str)]
    if invalid:
        raise ConfigurationError(f"Theme file {theme_path} keys must be strings: {', '.join(invalid)}")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ConfigurationError(f"Theme file {theme_path}: 'name' must be a string if set")
    label = name.strip() if isinstance(name, str) and name.strip() else theme_path.stem

    return Theme(
        name=label,
        accent=decode_color_code(data["accent"]),
        dim=decode_color_code(data["dim"]),
        glow=decode_color_code(data["glow"]),
    )


def builtin_theme(name: str) -> Theme:
    key = name.strip().lower()
    try:
        return BUILTIN_THEMES[key]
    except KeyError:
        valid = ", ".join(sorted(BUILTIN_THEMES))
        raise ConfigurationError(f"Unknown theme '{name}'. Valid themes: {valid}") from None


def resolve_theme(
    theme_path: Optional[Path | str],
    theme_name: Optional[str],
    defaults: EnvironmentDefaults,
) -> Theme:
    """Pick exactly one theme source; a theme file always wins."""
    if theme_path is not None:
        theme = load_theme_file(theme_path)
        logger.info("Theme loaded from file %s: %s", theme_path, theme.name)
        return theme
    if theme_name:
        theme = builtin_theme(theme_name)
        logger.info("Using built-in theme: %s", theme.name)
        return theme
    logger.info("Using environment default colors")
    return Theme(name=DEFAULT_THEME_NAME, accent=defaults.accent, dim=defaults.dim, glow=defaults.glow)
