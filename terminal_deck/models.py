from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

MIN_FRAME_WIDTH = 20
MAX_FRAME_WIDTH = 240
FRAME_WIDTH_STEP = 2

NOTE_PREFIX = "@@"


class LineKind(str, Enum):
    HEADING = "heading"
    LIST = "list"
    QUOTE = "quote"
    RULE = "rule"
    PLAIN = "plain"


_MARKER_KINDS = {
    "#": LineKind.HEADING,
    "-": LineKind.LIST,
    ">": LineKind.QUOTE,
}

_RULE_CHARS = frozenset("-=–")


def classify_line(text: str) -> LineKind:
    stripped = text.strip()
    if not stripped:
        return LineKind.PLAIN
    if len(stripped) >= 3 and all(ch in _RULE_CHARS for ch in stripped):
        return LineKind.RULE
    return _MARKER_KINDS.get(stripped[0], LineKind.PLAIN)


@dataclass(frozen=True)
class SlideLine:
    text: str
    kind: LineKind = LineKind.PLAIN

    @classmethod
    def from_text(cls, text: str) -> "SlideLine":
        return cls(text=text, kind=classify_line(text))


@dataclass(frozen=True)
class Slide:
    lines: Tuple[SlideLine, ...] = field(default_factory=tuple)
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_notes_only(self) -> bool:
        return not self.lines and bool(self.notes)


@dataclass(frozen=True)
class Deck:
    slides: Tuple[Slide, ...]
    sources: Tuple[Path, ...] = field(default_factory=tuple)
    # index into `sources` for every slide
    slide_sources: Tuple[int, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.slides)

    def __getitem__(self, index: int) -> Slide:
        return self.slides[index]

    def source_of(self, index: int) -> Optional[Path]:
        if index >= len(self.slide_sources):
            return None
        return self.sources[self.slide_sources[index]]

    @property
    def is_empty(self) -> bool:
        return not self.slides


@dataclass(frozen=True)
class Theme:
    name: str
    accent: str
    dim: str
    glow: str

    @property
    def label(self) -> str:
        return self.name.upper()


@dataclass(frozen=True)
class PresentationConfig:
    frame_width: int
    theme: Theme
    title: str
    banner_path: Optional[Path] = None
    instant: bool = False
    presenter: bool = False

    @property
    def animations_enabled(self) -> bool:
        return not self.instant
