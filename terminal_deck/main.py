"""CLI entrypoint for the terminal deck."""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from config_loader import load_config
from logging_utils import configure_logging, get_logger

from .banner import load_banner
from .environment import EnvironmentDefaults, load_environment_defaults, parse_frame_width
from .errors import DeckError
from .models import PresentationConfig
from .session import PresentationSession
from .sources import assemble_sources, build_deck
from .terminal import AnsiTerminal, Terminal
from .themes import BUILTIN_THEMES, resolve_theme

logger = get_logger(__name__)

ERROR_PREFIX = "\x1b[31mError:\x1b[0m"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Retro-futuristic slide presenter for the terminal")
    parser.add_argument("scripts", nargs="*", help="Slide script files, shown in the given order")
    parser.add_argument("-b", "--banner", help="Path to an ASCII banner file")
    parser.add_argument("-t", "--title", help="Presentation title override")
    parser.add_argument("--frame-width", help="Frame width in characters (default: FRAME_WIDTH or 120)")
    parser.add_argument(
        "--theme",
        type=str.lower,
        choices=sorted(BUILTIN_THEMES),
        help="Built-in color theme",
    )
    parser.add_argument("--theme-path", help="Theme file (TOML, YAML or JSON) with accent/dim/glow colors")
    parser.add_argument("--instant", action="store_true", help="Render without reveal animation")
    parser.add_argument("--skip-banner", action="store_true", help="Do not show the start banner")
    parser.add_argument("--playlist", help="File listing script paths, one per line")
    parser.add_argument("--directory", help="Directory whose files are appended as scripts (sorted by name)")
    parser.add_argument("--presenter", action="store_true", help="Start with the presenter panel visible")
    parser.add_argument(
        "--config",
        help="Path to YAML configuration (default: terminal_deck.yaml when present)",
    )
    return parser


def build_presentation_config(args: argparse.Namespace, defaults: EnvironmentDefaults) -> PresentationConfig:
    frame_width = (
        parse_frame_width(args.frame_width, source="--frame-width")
        if args.frame_width is not None
        else defaults.frame_width
    )
    theme = resolve_theme(args.theme_path, args.theme or defaults.theme_name, defaults)

    banner_path: Optional[Path] = None
    if not args.skip_banner:
        banner_path = Path(args.banner).expanduser() if args.banner else defaults.banner_path

    return PresentationConfig(
        frame_width=frame_width,
        theme=theme,
        title=args.title or defaults.title,
        banner_path=banner_path,
        instant=args.instant,
        presenter=args.presenter,
    )


def main(
    argv: list[str] | None = None,
    *,
    environ: Optional[dict] = None,
    terminal_factory: Callable[[], Terminal] = AnsiTerminal,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.scripts or args.playlist or args.directory):
        parser.error("provide at least one script, --playlist or --directory")

    try:
        app_config = load_config(args.config)
        configure_logging(level=app_config.logging_level, log_file=app_config.log_file)

        defaults = load_environment_defaults(environ)
        config = build_presentation_config(args, defaults)

        sources = assemble_sources(args.scripts, playlist=args.playlist, directory=args.directory)
        deck = build_deck(sources)

        banner_lines = None
        if config.banner_path is not None:
            banner_lines = load_banner(config.banner_path, required=bool(args.banner))
            if banner_lines is None:
                config = replace(config, banner_path=None)
    except (DeckError, OSError, ValueError) as exc:
        logger.info("Startup failed: %s", exc)
        print(f"{ERROR_PREFIX} {exc}", file=sys.stderr)
        return 1

    logger.info(
        "Presenting %d slides (theme=%s, width=%d, instant=%s)",
        len(deck),
        config.theme.name,
        config.frame_width,
        config.instant,
    )
    try:
        terminal = terminal_factory()
        return PresentationSession(deck, config, terminal, banner_lines=banner_lines).run()
    except OSError as exc:
        logger.info("Terminal output failed: %s", exc)
        print(f"{ERROR_PREFIX} {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
