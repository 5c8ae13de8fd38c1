from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from terminal_deck.models import MAX_FRAME_WIDTH, MIN_FRAME_WIDTH, Slide, SlideLine, Theme  # noqa: E402
from terminal_deck.renderer import (  # noqa: E402
    RESET,
    render_frame,
    render_frames,
    render_notice,
    strip_ansi,
    visible_width,
    wrap_text,
)

THEME = Theme(name="test", accent="\x1b[31m", dim="\x1b[32m", glow="\x1b[33m")

LOREM = (
    "Terminal presentations keep the focus on words while supercalifragilisticexpialidocious "
    "identifiers and http://example.com/a/very/long/path/that/never/breaks stress the wrapper"
)


def _slide(*texts: str, notes: tuple[str, ...] = ()) -> Slide:
    return Slide(lines=tuple(SlideLine.from_text(text) for text in texts), notes=notes)


def _inner(line: str) -> str:
    return strip_ansi(line)[2:-2]


def test_render_is_idempotent() -> None:
    slide = _slide("# Title", "- bullet", "> quote", LOREM)

    assert render_frame(slide, 60, THEME) == render_frame(slide, 60, THEME)
    assert list(render_frames(slide, 60, THEME, instant=True)) == list(render_frames(slide, 60, THEME, instant=True))


def test_frame_has_borders_spanning_the_width() -> None:
    frame = render_frame(_slide("hello"), 30, THEME)

    assert strip_ansi(frame[0]) == "╭" + "─" * 28 + "╮"
    assert strip_ansi(frame[-1]) == "╰" + "─" * 28 + "╯"
    assert strip_ansi(frame[1]) == "│ hello" + " " * 21 + " │"
    assert all(visible_width(line) == 30 for line in frame)


@pytest.mark.parametrize("width", range(MIN_FRAME_WIDTH, 81, 7))
def test_wrapped_lines_never_exceed_inner_width(width: int) -> None:
    slide = _slide(LOREM, "# " + LOREM, "x" * 300, "- \tTabbed\tbullet " * 6)

    frame = render_frame(slide, width, THEME)

    for line in frame[1:-1]:
        assert visible_width(line) == width
        assert len(_inner(line)) <= width - 4


def test_words_that_fit_are_never_split() -> None:
    text = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda"

    segments = wrap_text(text, 16)

    assert " ".join(segments).split() == text.split()
    assert all(len(segment) <= 16 for segment in segments)


def test_overlong_word_is_hard_cut_at_wrap_width() -> None:
    frame = render_frame(_slide("x" * 40), 20, THEME)

    assert [_inner(line).rstrip() for line in frame[1:-1]] == ["x" * 16, "x" * 16, "x" * 8]


def test_markers_select_theme_colors() -> None:
    frame = render_frame(_slide("# Heading", "- item", "> quote", "plain"), 40, THEME)

    assert f"{THEME.accent}# Heading{RESET}" in frame[1]
    assert f"{THEME.dim}- item{RESET}" in frame[2]
    assert f"{THEME.glow}> quote{RESET}" in frame[3]
    assert frame[4] == f"{THEME.dim}│{RESET} plain{' ' * 31} {THEME.dim}│{RESET}"


def test_rule_line_spans_wrap_width() -> None:
    frame = render_frame(_slide("---"), 24, THEME)

    assert _inner(frame[1]) == "─" * 20


def test_notes_only_slide_renders_empty_frame() -> None:
    frame = render_frame(_slide(notes=("speaker only",)), 24, THEME)

    assert len(frame) == 3
    assert _inner(frame[1]) == " " * 20
    assert "speaker only" not in "".join(frame)


def test_animated_sequence_is_restartable_and_ends_with_full_frame() -> None:
    slide = _slide("one", "two", "three")
    full = render_frame(slide, 30, THEME)

    frames = render_frames(slide, 30, THEME, instant=False)
    first_pass = list(frames)
    second_pass = list(frames)

    assert len(frames) == 3
    assert first_pass == second_pass
    assert first_pass[-1] == full
    assert first_pass[0] == full[:2]
    assert first_pass[1] == full[:3]
    assert [len(frame) for frame in first_pass] == sorted(len(frame) for frame in first_pass)


def test_instant_sequence_has_exactly_the_full_frame() -> None:
    slide = _slide("one", "two", "three")

    frames = list(render_frames(slide, 30, THEME, instant=True))

    assert frames == [render_frame(slide, 30, THEME)]


@pytest.mark.parametrize("width", [MIN_FRAME_WIDTH - 1, MAX_FRAME_WIDTH + 1])
def test_out_of_range_width_is_rejected(width: int) -> None:
    with pytest.raises(ValueError):
        render_frame(_slide("x"), width, THEME)


def test_notice_frame_wraps_message() -> None:
    frame = render_notice("nothing to show in this deck at all", 20, THEME)

    assert all(visible_width(line) == 20 for line in frame)
    assert "nothing" in strip_ansi(frame[1])
