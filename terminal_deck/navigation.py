"""Keyboard-driven navigation as pure ``(state, key) -> transition`` functions."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .models import FRAME_WIDTH_STEP, MAX_FRAME_WIDTH, MIN_FRAME_WIDTH, PresentationConfig


class Key(str, Enum):
    RIGHT = "right"
    LEFT = "left"
    ENTER = "enter"
    PLUS = "plus"
    MINUS = "minus"
    QUIT = "quit"
    ESC = "esc"
    PRESENTER = "presenter"
    OTHER = "other"


class Mode(str, Enum):
    BANNER = "banner"
    VIEWING = "viewing"
    PRESENTER = "presenter"
    TERMINATED = "terminated"


class Directive(str, Enum):
    NONE = "none"
    # fresh reveal of the current slide from its first unit
    ANIMATE = "animate"
    # complete frame at once
    REDRAW = "redraw"


@dataclass(frozen=True)
class SessionState:
    mode: Mode
    index: int
    frame_width: int
    started_at: float

    @property
    def presenter(self) -> bool:
        return self.mode is Mode.PRESENTER

    @property
    def terminated(self) -> bool:
        return self.mode is Mode.TERMINATED


@dataclass(frozen=True)
class Transition:
    state: SessionState
    directive: Directive = Directive.NONE


def initial_state(config: PresentationConfig, now: float) -> SessionState:
    if config.banner_path is not None:
        mode = Mode.BANNER
    else:
        mode = Mode.PRESENTER if config.presenter else Mode.VIEWING
    return SessionState(mode=mode, index=0, frame_width=config.frame_width, started_at=now)


def leave_banner(state: SessionState, *, presenter: bool) -> Transition:
    if state.mode is not Mode.BANNER:
        return Transition(state)
    mode = Mode.PRESENTER if presenter else Mode.VIEWING
    return Transition(replace(state, mode=mode), Directive.ANIMATE)


def _move(state: SessionState, index: int) -> Transition:
    if index == state.index:
        return Transition(state)
    return Transition(replace(state, index=index), Directive.ANIMATE)


def _resize(state: SessionState, width: int) -> Transition:
    width = max(MIN_FRAME_WIDTH, min(MAX_FRAME_WIDTH, width))
    if width == state.frame_width:
        return Transition(state)
    return Transition(replace(state, frame_width=width), Directive.REDRAW)


def transition(state: SessionState, key: Key, deck_length: int) -> Transition:
    """Apply ``key`` to ``state``.

    Index moves clamp at both ends; width changes are bounded. Keys that do
    not change anything yield ``Directive.NONE``.
    """
    if state.mode in (Mode.TERMINATED, Mode.BANNER):
        return Transition(state)

    if key in (Key.RIGHT, Key.ENTER):
        return _move(state, min(state.index + 1, deck_length - 1))
    if key is Key.LEFT:
        return _move(state, max(state.index - 1, 0))
    if key is Key.PLUS:
        return _resize(state, state.frame_width + FRAME_WIDTH_STEP)
    if key is Key.MINUS:
        return _resize(state, state.frame_width - FRAME_WIDTH_STEP)
    if key in (Key.QUIT, Key.ESC):
        return Transition(replace(state, mode=Mode.TERMINATED))
    if key is Key.PRESENTER:
        mode = Mode.VIEWING if state.mode is Mode.PRESENTER else Mode.PRESENTER
        return Transition(replace(state, mode=mode), Directive.REDRAW)
    return Transition(state)


def format_elapsed(seconds: float) -> str:
    if seconds < 0:
        seconds = 0
    seconds = int(seconds)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"
