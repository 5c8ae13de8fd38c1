"""Assemble script sources (explicit files, playlist, directory) into a deck."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from logging_utils import get_logger

from .errors import SourceError
from .models import Deck, Slide
from .script_parser import load_slides

logger = get_logger(__name__)


def _normalize(path: Path | str, base_dir: Optional[Path] = None) -> Path:
    candidate = Path(path).expanduser()
    if base_dir is not None and not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


def read_playlist(path: Path | str) -> List[Path]:
    """Return playlist entries in file order.

    Blank lines and `#` comments are skipped; relative entries are resolved
    against the playlist's own directory.
    """
    playlist_path = Path(path).expanduser().resolve()
    try:
        content = playlist_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceError(playlist_path, "playlist file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(playlist_path, f"playlist could not be read ({exc})") from exc

    entries: List[Path] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(_normalize(line, playlist_path.parent))
    return entries


def list_directory(path: Path | str) -> List[Path]:
    """Regular files of ``path`` sorted by name."""
    directory = Path(path).expanduser().resolve()
    if not directory.is_dir():
        raise SourceError(directory, "directory not found")
    try:
        files = [entry for entry in directory.iterdir() if entry.is_file()]
    except OSError as exc:
        raise SourceError(directory, f"directory could not be listed ({exc})") from exc
    return sorted(files, key=lambda entry: entry.name)


def assemble_sources(
    explicit: Sequence[Path | str] = (),
    playlist: Optional[Path | str] = None,
    directory: Optional[Path | str] = None,
) -> List[Path]:
    """Merge explicit paths, playlist entries and directory files.

    The first occurrence of a normalized path keeps its position; later
    duplicates are dropped.
    """
    candidates: List[Path] = [_normalize(item) for item in explicit]
    if playlist is not None:
        candidates.extend(read_playlist(playlist))
    if directory is not None:
        candidates.extend(_normalize(entry) for entry in list_directory(directory))

    accepted: List[Path] = []
    seen = set()
    for candidate in candidates:
        if candidate in seen:
            logger.debug("Skipping duplicate source: %s", candidate)
            continue
        seen.add(candidate)
        accepted.append(candidate)

    logger.info("Assembled %d script sources (%d candidates)", len(accepted), len(candidates))
    return accepted


def build_deck(paths: Iterable[Path]) -> Deck:
    """Parse every source; any failure aborts the whole deck."""
    sources = tuple(paths)
    slides: List[Slide] = []
    slide_sources: List[int] = []
    for position, source in enumerate(sources):
        loaded = load_slides(source)
        slides.extend(loaded)
        slide_sources.extend([position] * len(loaded))
    logger.info("Deck ready: %d slides from %d sources", len(slides), len(sources))
    return Deck(slides=tuple(slides), sources=sources, slide_sources=tuple(slide_sources))
