"""Loguru sinks for the aria2rpc CLI."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from aria2rpc.config.loader import get_data_dir

_FILE_SINKS: dict[Path, int] = {}


def configure_console_logging(verbose: bool = False) -> None:
    """Reset all sinks to one stderr sink; warnings only unless verbose."""
    logger.remove()
    _FILE_SINKS.clear()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def get_log_path(name: str) -> Path:
    return get_data_dir() / "logs" / f"{name}.log"


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Add a rotating file sink at ``~/.aria2rpc/logs/<name>.log`` once per path."""
    log_path = get_log_path(name)
    if log_path not in _FILE_SINKS:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _FILE_SINKS[log_path] = logger.add(
            log_path,
            level=level,
            rotation="10 MB",
            retention="14 days",
            encoding="utf-8",
        )
    return log_path
