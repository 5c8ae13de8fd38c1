from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

from logging_utils import get_logger

from .errors import SourceError
from .models import Theme
from .renderer import RESET, RevealSequence

logger = get_logger(__name__)

BOLD = "\x1b[1m"


def load_banner(path: Path | str, *, required: bool = True) -> Optional[Tuple[str, ...]]:
    """Read the ASCII banner.

    A missing optional (default) banner returns ``None`` with a warning;
    a missing required banner is a source error.
    """
    banner_path = Path(path).expanduser()
    try:
        content = banner_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        if not required:
            logger.warning("Default banner not loaded (%s): %s", banner_path, exc)
            return None
        raise SourceError(banner_path, f"banner could not be read ({exc})") from exc
    return tuple(line.rstrip() for line in content.splitlines())


def banner_frames(lines: Sequence[str], theme: Theme, *, instant: bool) -> RevealSequence:
    styled = [f"{theme.glow}{BOLD}{line}{RESET}" for line in lines]
    return RevealSequence(styled, progressive=not instant)
