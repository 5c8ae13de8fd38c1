"""Terminal I/O: key decoding and the POSIX terminal adapter."""
from __future__ import annotations

import os
import select
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Sequence, TextIO

from logging_utils import get_logger

from .navigation import Key

logger = get_logger(__name__)

ESC = "\x1b"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[H\x1b[2J"

_SEQUENCES = {
    "\x1b[C": Key.RIGHT,
    "\x1bOC": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOD": Key.LEFT,
    "\x1b": Key.ESC,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "+": Key.PLUS,
    "=": Key.PLUS,
    "-": Key.MINUS,
    "_": Key.MINUS,
    "q": Key.QUIT,
    "Q": Key.QUIT,
    "p": Key.PRESENTER,
    "P": Key.PRESENTER,
}

# time allowed for the rest of an escape sequence to arrive
_ESCAPE_TIMEOUT = 0.03


def decode_key(sequence: str) -> Key:
    return _SEQUENCES.get(sequence, Key.OTHER)


class Terminal(ABC):
    """What the session loop needs from a terminal."""

    @abstractmethod
    def next_key(self) -> Key:
        """Block until the next key event."""

    @abstractmethod
    def key_pending(self) -> bool:
        """Whether a key can be read without blocking."""

    @abstractmethod
    def write_frame(self, lines: Sequence[str]) -> None:
        """Replace the screen content with ``lines``."""

    @contextmanager
    def session(self) -> Iterator["Terminal"]:
        yield self


class AnsiTerminal(Terminal):
    """POSIX terminal in cbreak mode with the cursor hidden."""

    def __init__(self, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self._fd = stdin.fileno()

    @contextmanager
    def session(self) -> Iterator["AnsiTerminal"]:
        import termios
        import tty

        try:
            saved = termios.tcgetattr(self._fd)
        except termios.error as exc:
            raise OSError(f"stdin is not a terminal ({exc})") from exc
        try:
            tty.setcbreak(self._fd)
            self.stdout.write(HIDE_CURSOR)
            self.stdout.flush()
            yield self
        finally:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
            self.stdout.write(SHOW_CURSOR + "\n")
            self.stdout.flush()
            logger.debug("Terminal mode restored")

    def _ready(self, timeout: float) -> bool:
        readable, _, _ = select.select([self._fd], [], [], timeout)
        return bool(readable)

    def _read_char(self) -> str:
        return os.read(self._fd, 1).decode("utf-8", errors="ignore")

    def next_key(self) -> Key:
        first = os.read(self._fd, 1)
        if not first:
            # stdin closed
            return Key.QUIT
        sequence = first.decode("utf-8", errors="ignore")
        if sequence == ESC:
            while len(sequence) < 6 and self._ready(_ESCAPE_TIMEOUT):
                sequence += self._read_char()
                if len(sequence) > 2 and (sequence[-1].isalpha() or sequence[-1] == "~"):
                    break
        return decode_key(sequence)

    def key_pending(self) -> bool:
        return self._ready(0)

    def write_frame(self, lines: Sequence[str]) -> None:
        self.stdout.write(CLEAR_SCREEN + "\n".join(lines) + "\n")
        self.stdout.flush()
