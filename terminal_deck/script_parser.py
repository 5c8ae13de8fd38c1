"""Parse slide scripts: blank-line separated paragraphs with `@@` presenter notes."""
from __future__ import annotations

from pathlib import Path
from typing import List

from logging_utils import get_logger

from .errors import SourceError
from .models import NOTE_PREFIX, Slide, SlideLine

logger = get_logger(__name__)


def _split_paragraphs(text: str) -> List[List[str]]:
    paragraphs: List[List[str]] = []
    current: List[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.removesuffix("\r")
        if line.strip():
            current.append(line)
        else:
            if current:
                paragraphs.append(current)
                current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def _strip_note_prefix(line: str) -> str:
    note = line[len(NOTE_PREFIX):]
    if note.startswith(" "):
        note = note[1:]
    return note


def parse_slides(text: str) -> List[Slide]:
    """Split script text into slides.

    Every non-blank paragraph becomes one slide. Lines starting with ``@@`` are
    moved into the slide's notes (prefix and one separating space removed);
    all other lines are kept verbatim as display lines.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    slides: List[Slide] = []
    for paragraph in _split_paragraphs(text):
        lines: List[SlideLine] = []
        notes: List[str] = []
        for line in paragraph:
            if line.startswith(NOTE_PREFIX):
                notes.append(_strip_note_prefix(line))
            else:
                lines.append(SlideLine.from_text(line))
        slides.append(Slide(lines=tuple(lines), notes=tuple(notes)))
    return slides


def load_slides(path: Path | str) -> List[Slide]:
    script_path = Path(path).expanduser()
    try:
        text = script_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceError(script_path, "script file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(script_path, f"script file could not be read ({exc})") from exc

    slides = parse_slides(text)
    logger.info("Parsed %s into %d slides", script_path, len(slides))
    return slides
