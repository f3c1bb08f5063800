"""Loguru helpers for consistent logging in the CLI."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_SINK_IDS: dict[str, int] = {}


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """Route log records to stderr at ``level`` and optionally to a rotating file."""
    level = level.upper()
    sink_id = _SINK_IDS.pop("stderr", None)
    if sink_id is None:
        # First call replaces loguru's default stderr handler.
        logger.remove()
    else:
        logger.remove(sink_id)
    _SINK_IDS["stderr"] = logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>",
        backtrace=False,
        diagnose=False,
    )
    if log_file is not None:
        ensure_rotating_log_file(log_file, level=level)


def ensure_rotating_log_file(log_path: Path, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given file."""
    key = str(log_path)
    if key in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[key] = sink_id
    return log_path
