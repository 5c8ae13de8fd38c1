"""Interactive session: drives navigation, pacing and screen composition."""
from __future__ import annotations

import textwrap
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from logging_utils import get_logger

from .banner import banner_frames
from .models import Deck, PresentationConfig, Slide, Theme
from .navigation import (
    Directive,
    Mode,
    SessionState,
    format_elapsed,
    initial_state,
    leave_banner,
    transition,
)
from .renderer import RESET, render_frames, render_notice
from .terminal import Terminal

logger = get_logger(__name__)

PANEL_WIDTH = 36
PANEL_GAP = "  "
LINE_DELAY = 0.06
BANNER_LINE_DELAY = 0.11
BANNER_HOLD = 0.24
EMPTY_DECK_MESSAGE = "(no content in the provided scripts)"

WARMUP_PHASES = (
    "[.. ] spinning up retro tube",
    "[<. ] calibrating scanline",
    "[<<.] loading phosphor",
    "[<<<] ready to beam",
)
WARMUP_DELAY = 0.22
TRANSITION_PHASES = (
    "[⠁] syncing tracks",
    "[⠃] calibrating light",
    "[⠇] loading vectors",
    "[⠇] assembling frames",
    "[⠧] tuning luminance",
    "[⠷] finalizing",
)
TRANSITION_DONE = "[READY]"
TRANSITION_DELAY = 0.07
TRANSITION_HOLD = 0.21


def title_rule(title: str, width: int, theme: Theme) -> str:
    label = f"╢ {title.upper()} ╟"
    fill = max(0, width - len(label))
    left = fill // 2
    right = fill - left
    return f"{theme.dim}{'═' * left}{theme.glow}{label}{theme.dim}{'═' * right}{RESET}"


def source_line(source: Path, theme: Theme) -> str:
    return f"{theme.dim}SOURCE ::{RESET} {theme.accent}{source.name}{RESET}"


def status_line(position: str, frame_width: int, config: PresentationConfig) -> str:
    theme = config.theme
    mode = "INSTANT" if config.instant else "CINEMATIC"
    return (
        f"{theme.dim}SEQ ::{RESET} {theme.accent}{position}{RESET}  "
        f"{theme.dim}FRAME ::{RESET} {theme.accent}{frame_width}{RESET}  "
        f"{theme.dim}THEME ::{RESET} {theme.glow}{theme.label}{RESET}  "
        f"{theme.dim}MODE ::{RESET} {theme.accent}{mode}{RESET}"
    )


def help_line(theme: Theme) -> str:
    return (
        f"{theme.dim}CTRL ::{RESET} {theme.glow}←/→{RESET} or Enter slides  "
        f"{theme.glow}+/-{RESET} width  {theme.glow}P{RESET} presenter  "
        f"{theme.glow}Q/Esc{RESET} quit"
    )


def presenter_panel(slide: Slide, elapsed: float, theme: Theme, width: int = PANEL_WIDTH) -> List[str]:
    """Elapsed time plus the slide's notes numbered from 1."""
    lines = [
        f"{theme.glow}PRESENTER{RESET} {theme.dim}::{RESET} {theme.accent}{format_elapsed(elapsed)}{RESET}",
        f"{theme.dim}NOTES ::{RESET}",
    ]
    if not slide.notes:
        lines.append(f"{theme.dim}(no notes){RESET}")
        return lines
    for number, note in enumerate(slide.notes, start=1):
        prefix = f"{number}. "
        wrapped = textwrap.wrap(
            f"{prefix}{note}",
            width=width,
            subsequent_indent=" " * len(prefix),
            break_on_hyphens=False,
        )
        lines.extend(wrapped or [prefix.rstrip()])
    return lines


def side_by_side(frame: Sequence[str], panel: Sequence[str], frame_width: int) -> List[str]:
    rows: List[str] = []
    for row in range(max(len(frame), len(panel))):
        left = frame[row] if row < len(frame) else " " * frame_width
        if row < len(panel):
            rows.append(f"{left}{PANEL_GAP}{panel[row]}")
        else:
            rows.append(left)
    return rows


def _phase_frames(phases: Sequence[str]) -> List[Tuple[str, ...]]:
    return [(phase,) for phase in phases]


class PresentationSession:
    """Single-threaded control loop owning the session state."""

    def __init__(
        self,
        deck: Deck,
        config: PresentationConfig,
        terminal: Terminal,
        *,
        banner_lines: Optional[Sequence[str]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.deck = deck
        self.config = config
        self.terminal = terminal
        self.banner_lines = tuple(banner_lines) if banner_lines else ()
        self.clock = clock
        self.sleep = sleep
        self.state: Optional[SessionState] = None
        self._stale = False

    def run(self) -> int:
        if self.deck.is_empty:
            self._show_empty_deck()
            return 0

        with self.terminal.session():
            self.state = initial_state(self.config, self.clock())
            if self.state.mode is Mode.BANNER:
                self._show_banner()
                step = leave_banner(self.state, presenter=self.config.presenter)
                self.state = step.state
            self._render(Directive.ANIMATE, with_transition=False)

            while not self.state.terminated:
                key = self.terminal.next_key()
                step = transition(self.state, key, len(self.deck))
                self.state = step.state
                logger.debug(
                    "Key %s -> index=%d width=%d mode=%s directive=%s",
                    key.value,
                    self.state.index,
                    self.state.frame_width,
                    self.state.mode.value,
                    step.directive.value,
                )
                if self.state.terminated:
                    break
                directive = step.directive
                if directive is Directive.NONE and self._stale:
                    directive = Directive.REDRAW
                if directive is not Directive.NONE:
                    self._render(directive, with_transition=True)

        logger.info("Session finished at slide %d/%d", self.state.index + 1, len(self.deck))
        return 0

    def compose(self, frame: Sequence[str]) -> List[str]:
        """Full screen around a (possibly partial) frame."""
        state = self.state
        assert state is not None
        theme = self.config.theme
        body = list(frame)
        if state.presenter:
            panel = presenter_panel(self.deck[state.index], self.clock() - state.started_at, theme)
            body = side_by_side(body, panel, state.frame_width)
        position = f"{state.index + 1:03d}/{len(self.deck):03d}"
        source = self.deck.source_of(state.index)
        return [
            title_rule(self.config.title, state.frame_width, theme),
            *body,
            "",
            *([source_line(source, theme)] if source is not None else []),
            status_line(position, state.frame_width, self.config),
            help_line(theme),
        ]

    def _render(self, directive: Directive, *, with_transition: bool) -> None:
        state = self.state
        assert state is not None
        if with_transition and directive is Directive.ANIMATE and self.config.animations_enabled:
            if not self._play_transition():
                self._stale = True
                return
        frames = render_frames(
            self.deck[state.index],
            state.frame_width,
            self.config.theme,
            instant=self.config.instant or directive is Directive.REDRAW,
        )
        completed = self._play(frames, self.compose, LINE_DELAY)
        self._stale = not completed

    def _play(
        self,
        frames: Iterable[Sequence[str]],
        compose: Callable[[Sequence[str]], List[str]],
        delay: float,
    ) -> bool:
        """Write frames with pacing; abort when a key is waiting.

        Returns False when the reveal was interrupted before the full frame.
        """
        frames = list(frames)
        animated = len(frames) > 1
        last = len(frames) - 1
        for step, frame in enumerate(frames):
            if animated and self.terminal.key_pending():
                logger.debug("Reveal interrupted at step %d/%d", step, last + 1)
                return False
            self.terminal.write_frame(compose(frame))
            if animated and step < last:
                self.sleep(delay)
        return True

    def _show_banner(self) -> None:
        if not self.banner_lines:
            return
        if self.config.animations_enabled:
            if not self._play(_phase_frames(WARMUP_PHASES), self._dimmed, WARMUP_DELAY):
                return
        frames = banner_frames(self.banner_lines, self.config.theme, instant=self.config.instant)
        if self._play(frames, list, BANNER_LINE_DELAY) and self.config.animations_enabled:
            self.sleep(BANNER_HOLD)

    def _play_transition(self) -> bool:
        frames = _phase_frames((*TRANSITION_PHASES, TRANSITION_DONE))
        if not self._play(frames, self._transition_screen, TRANSITION_DELAY):
            return False
        self.sleep(TRANSITION_HOLD)
        return True

    def _dimmed(self, frame: Sequence[str]) -> List[str]:
        dim = self.config.theme.dim
        return [f"{dim}{line}{RESET}" for line in frame]

    def _transition_screen(self, frame: Sequence[str]) -> List[str]:
        state = self.state
        assert state is not None
        return [title_rule(self.config.title, state.frame_width, self.config.theme), "", *self._dimmed(frame)]

    def _show_empty_deck(self) -> None:
        width = self.config.frame_width
        theme = self.config.theme
        self.terminal.write_frame(
            [
                title_rule(self.config.title, width, theme),
                *render_notice(EMPTY_DECK_MESSAGE, width, theme),
                "",
                status_line("000/000", width, self.config),
            ]
        )
        logger.warning("Deck is empty; nothing to present")
