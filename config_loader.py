"""Configuration loader for the terminal deck."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml  # type: ignore
except ModuleNotFoundError as exc:  # pragma: no cover - import guard
    raise RuntimeError(
        "PyYAML is required. Please install it with `pip install pyyaml`."
    ) from exc


DEFAULT_CONFIG_PATH = Path("terminal_deck.yaml")
DEFAULT_LOG_FILE = "logs/terminal_deck.log"


@dataclass
class AppConfig:
    """Wrapper around raw configuration with resolved paths."""

    raw: Dict[str, Any]
    config_path: Optional[Path]
    log_file: Path

    @property
    def logging_level(self) -> str:
        logging_cfg = self.raw.get("logging") or {}
        level = logging_cfg.get("level") or logging_cfg.get("LEVEL") or "INFO"
        return str(level).upper()

    def to_debug_dict(self) -> Dict[str, Any]:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "log_file": str(self.log_file),
            "logging_level": self.logging_level,
        }

    def dumps(self) -> str:
        """Return a JSON string for diagnostics."""
        return json.dumps(self.to_debug_dict(), ensure_ascii=False, indent=2)


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load the YAML config and resolve the log file.

    An explicit path must exist; without one, ``terminal_deck.yaml`` in the
    working directory is used when present and defaults apply otherwise.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AppConfig(raw={}, config_path=None, log_file=Path(DEFAULT_LOG_FILE).resolve())
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in config file {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    logging_cfg = raw.get("logging") or {}
    if not isinstance(logging_cfg, dict):
        raise ValueError(f"'logging' must be a mapping: {config_path}")

    log_file_name = logging_cfg.get("file", DEFAULT_LOG_FILE)
    log_file = (config_path.parent / log_file_name).resolve()

    return AppConfig(
        raw=raw,
        config_path=config_path,
        log_file=log_file,
    )
