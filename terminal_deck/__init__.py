"""
Terminal slide presenter.

Turns blank-line separated text scripts into a deck of slides and presents
them inside the terminal with themed ANSI frames, reveal animation and an
optional presenter panel.
"""

from __future__ import annotations

__all__ = [
    "assemble_sources",
    "build_deck",
    "parse_slides",
    "resolve_theme",
    "render_frame",
    "render_frames",
    "PresentationSession",
]

from .renderer import render_frame, render_frames
from .script_parser import parse_slides
from .session import PresentationSession
from .sources import assemble_sources, build_deck
from .themes import resolve_theme
