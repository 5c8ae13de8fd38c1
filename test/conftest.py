from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Sequence

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from terminal_deck.navigation import Key  # noqa: E402
from terminal_deck.renderer import strip_ansi  # noqa: E402
from terminal_deck.terminal import Terminal  # noqa: E402


class ScriptedTerminal(Terminal):
    """Replays keys, answers key_pending from a script and records screens."""

    def __init__(self, keys: Sequence[Key] = (), pending: Sequence[bool] = ()) -> None:
        self.keys = list(keys)
        self.pending = list(pending)
        self.screens: List[List[str]] = []
        self.entered = False
        self.exited = False
        self.fail_writes = False

    def next_key(self) -> Key:
        return self.keys.pop(0) if self.keys else Key.QUIT

    def key_pending(self) -> bool:
        return self.pending.pop(0) if self.pending else False

    def write_frame(self, lines: Sequence[str]) -> None:
        if self.fail_writes:
            raise OSError("terminal went away")
        self.screens.append(list(lines))

    @contextmanager
    def session(self) -> Iterator["ScriptedTerminal"]:
        self.entered = True
        try:
            yield self
        finally:
            self.exited = True

    @property
    def plain_screens(self) -> List[str]:
        return ["\n".join(strip_ansi(line) for line in screen) for screen in self.screens]


@pytest.fixture
def scripted_terminal():
    return ScriptedTerminal
