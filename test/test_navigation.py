from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from terminal_deck.models import MAX_FRAME_WIDTH, MIN_FRAME_WIDTH, PresentationConfig, Theme  # noqa: E402
from terminal_deck.navigation import (  # noqa: E402
    Directive,
    Key,
    Mode,
    SessionState,
    format_elapsed,
    initial_state,
    leave_banner,
    transition,
)

THEME = Theme(name="t", accent="", dim="", glow="")


def _state(index: int = 0, width: int = 60, mode: Mode = Mode.VIEWING) -> SessionState:
    return SessionState(mode=mode, index=index, frame_width=width, started_at=0.0)


def test_left_at_first_slide_is_clamped() -> None:
    step = transition(_state(0), Key.LEFT, 3)

    assert step.state.index == 0
    assert step.directive is Directive.NONE


def test_right_at_last_slide_is_clamped_and_does_not_exit() -> None:
    step = transition(_state(2), Key.RIGHT, 3)

    assert step.state.index == 2
    assert step.state.mode is Mode.VIEWING
    assert step.directive is Directive.NONE


@pytest.mark.parametrize("key", [Key.RIGHT, Key.ENTER])
def test_forward_keys_advance_and_animate(key: Key) -> None:
    step = transition(_state(0), key, 3)

    assert step.state.index == 1
    assert step.directive is Directive.ANIMATE


def test_walk_through_three_slides() -> None:
    state = _state(0)
    indices = []
    for _ in range(3):
        state = transition(state, Key.RIGHT, 3).state
        indices.append(state.index)

    assert indices == [1, 2, 2]


def test_left_moves_back() -> None:
    step = transition(_state(2), Key.LEFT, 3)

    assert step.state.index == 1
    assert step.directive is Directive.ANIMATE


def test_width_keys_step_by_two_and_redraw() -> None:
    wider = transition(_state(width=60), Key.PLUS, 3)
    narrower = transition(_state(width=60), Key.MINUS, 3)

    assert (wider.state.frame_width, wider.directive) == (62, Directive.REDRAW)
    assert (narrower.state.frame_width, narrower.directive) == (58, Directive.REDRAW)
    assert wider.state.index == narrower.state.index == 0


def test_width_is_bounded() -> None:
    at_max = transition(_state(width=MAX_FRAME_WIDTH), Key.PLUS, 3)
    at_min = transition(_state(width=MIN_FRAME_WIDTH), Key.MINUS, 3)
    near_min = transition(_state(width=MIN_FRAME_WIDTH + 1), Key.MINUS, 3)

    assert at_max.state.frame_width == MAX_FRAME_WIDTH
    assert at_max.directive is Directive.NONE
    assert at_min.state.frame_width == MIN_FRAME_WIDTH
    assert at_min.directive is Directive.NONE
    assert near_min.state.frame_width == MIN_FRAME_WIDTH


@pytest.mark.parametrize("key", [Key.QUIT, Key.ESC])
def test_quit_keys_terminate(key: Key) -> None:
    step = transition(_state(1), key, 3)

    assert step.state.terminated
    assert step.state.index == 1


def test_presenter_toggle_keeps_index_and_width() -> None:
    on = transition(_state(1, 50), Key.PRESENTER, 3)
    off = transition(on.state, Key.PRESENTER, 3)

    assert on.state.mode is Mode.PRESENTER
    assert on.directive is Directive.REDRAW
    assert (on.state.index, on.state.frame_width) == (1, 50)
    assert off.state.mode is Mode.VIEWING


def test_unrecognized_key_is_a_no_op() -> None:
    state = _state(1)

    step = transition(state, Key.OTHER, 3)

    assert step.state == state
    assert step.directive is Directive.NONE


def test_terminated_state_ignores_keys() -> None:
    state = _state(1, mode=Mode.TERMINATED)

    assert transition(state, Key.RIGHT, 3).state == state


def test_initial_state_and_banner_exit() -> None:
    config = PresentationConfig(frame_width=80, theme=THEME, title="T", banner_path=Path("banner.txt"))

    state = initial_state(config, now=12.5)
    assert state.mode is Mode.BANNER
    assert (state.index, state.frame_width, state.started_at) == (0, 80, 12.5)
    assert transition(state, Key.RIGHT, 3).state == state

    step = leave_banner(state, presenter=True)
    assert step.state.mode is Mode.PRESENTER
    assert step.directive is Directive.ANIMATE


def test_initial_state_without_banner_honours_presenter_flag() -> None:
    config = PresentationConfig(frame_width=80, theme=THEME, title="T", presenter=True)

    assert initial_state(config, now=0.0).mode is Mode.PRESENTER
    assert initial_state(replace(config, presenter=False), now=0.0).mode is Mode.VIEWING


def test_format_elapsed() -> None:
    assert format_elapsed(-3) == "00:00"
    assert format_elapsed(75.9) == "01:15"
    assert format_elapsed(3725) == "01:02:05"
