"""Error taxonomy for the terminal deck."""
from __future__ import annotations

from pathlib import Path


class DeckError(Exception):
    """Base class for fatal startup errors reported by the CLI."""


class ConfigurationError(DeckError, ValueError):
    """Unknown theme, malformed theme file, invalid frame width."""


class SourceError(DeckError, OSError):
    """Unreadable script, playlist or directory."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


__all__ = ["DeckError", "ConfigurationError", "SourceError"]
