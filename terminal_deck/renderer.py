"""Frame rendering: bordered, word-wrapped, colorized slide output."""
from __future__ import annotations

import re
import textwrap
from typing import Iterator, List, Optional, Sequence, Tuple

from .models import MAX_FRAME_WIDTH, MIN_FRAME_WIDTH, LineKind, Slide, SlideLine, Theme

RESET = "\x1b[0m"
ITALIC = "\x1b[3m"

# "│ " + text + " │"
BORDER_OVERHEAD = 4

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

Frame = Tuple[str, ...]


def strip_ansi(text: str) -> str:
    return _ANSI_PATTERN.sub("", text)


def visible_width(text: str) -> int:
    return len(strip_ansi(text))


def wrap_width(frame_width: int) -> int:
    return frame_width - BORDER_OVERHEAD


def _check_width(frame_width: int) -> None:
    if frame_width < MIN_FRAME_WIDTH or frame_width > MAX_FRAME_WIDTH:
        raise ValueError(
            f"frame width must be between {MIN_FRAME_WIDTH} and {MAX_FRAME_WIDTH} (got {frame_width})"
        )


def wrap_text(text: str, width: int) -> List[str]:
    """Wrap on word boundaries; words longer than ``width`` are hard-cut."""
    segments = textwrap.wrap(
        text,
        width=width,
        break_long_words=True,
        break_on_hyphens=False,
    )
    return segments or [""]


def _color_for(kind: LineKind, theme: Theme) -> Optional[str]:
    if kind is LineKind.HEADING:
        return theme.accent
    if kind in (LineKind.LIST, LineKind.RULE):
        return theme.dim
    if kind is LineKind.QUOTE:
        return theme.glow
    return None


def _boxed(segment: str, color: Optional[str], inner: int, theme: Theme) -> str:
    padding = " " * (inner - len(segment))
    body = f"{color}{segment}{RESET}" if color and segment else segment
    return f"{theme.dim}│{RESET} {body}{padding} {theme.dim}│{RESET}"


def top_rule(frame_width: int, theme: Theme) -> str:
    return f"{theme.dim}╭{'─' * (frame_width - 2)}╮{RESET}"


def bottom_rule(frame_width: int, theme: Theme) -> str:
    return f"{theme.dim}╰{'─' * (frame_width - 2)}╯{RESET}"


def render_line(line: SlideLine, frame_width: int, theme: Theme) -> List[str]:
    inner = wrap_width(frame_width)
    color = _color_for(line.kind, theme)
    if line.kind is LineKind.RULE:
        return [_boxed("─" * inner, color, inner, theme)]
    return [_boxed(segment, color, inner, theme) for segment in wrap_text(line.text, inner)]


def render_body(slide: Slide, frame_width: int, theme: Theme) -> List[str]:
    if not slide.lines:
        return [_boxed("", None, wrap_width(frame_width), theme)]
    body: List[str] = []
    for line in slide.lines:
        body.extend(render_line(line, frame_width, theme))
    return body


class RevealSequence:
    """Restartable, finite sequence of progressively longer partial frames.

    Each iteration starts from the first reveal unit (one body line) and the
    last element is always the complete frame.
    """

    def __init__(
        self,
        body: Sequence[str],
        *,
        header: Sequence[str] = (),
        footer: Sequence[str] = (),
        progressive: bool = True,
    ) -> None:
        self._header = tuple(header)
        self._body = tuple(body)
        self._footer = tuple(footer)
        self._progressive = progressive

    @property
    def final(self) -> Frame:
        return self._header + self._body + self._footer

    def __len__(self) -> int:
        if not self._progressive:
            return 1
        return max(1, len(self._body))

    def __iter__(self) -> Iterator[Frame]:
        if self._progressive:
            for count in range(1, len(self._body)):
                yield self._header + self._body[:count]
        yield self.final


def render_frame(slide: Slide, frame_width: int, theme: Theme) -> Frame:
    """Complete frame for ``slide``; identical inputs give identical output."""
    return render_frames(slide, frame_width, theme, instant=True).final


def render_frames(slide: Slide, frame_width: int, theme: Theme, *, instant: bool) -> RevealSequence:
    _check_width(frame_width)
    return RevealSequence(
        render_body(slide, frame_width, theme),
        header=(top_rule(frame_width, theme),),
        footer=(bottom_rule(frame_width, theme),),
        progressive=not instant,
    )


def render_notice(message: str, frame_width: int, theme: Theme) -> Frame:
    """Frame holding a single dim italic system message."""
    _check_width(frame_width)
    inner = wrap_width(frame_width)
    body = [_boxed(segment, f"{ITALIC}{theme.dim}", inner, theme) for segment in wrap_text(message, inner)]
    return (top_rule(frame_width, theme), *body, bottom_rule(frame_width, theme))
