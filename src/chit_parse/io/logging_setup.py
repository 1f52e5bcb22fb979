"""Logging bootstrap for the chit-parse command line.

A CLI run is short-lived, so by default only stderr gets log output. A
rotating file is attached when the environment asks for one:

- ``CHIT_PARSE_LOG_FILE``: exact file path.
- ``CHIT_PARSE_LOG_DIR``: directory holding one ``<session>.log`` that every
  run appends to and rotates.
- ``CHIT_PARSE_LOG_LEVEL``: level name, default WARNING.

// [LAW:single-enforcer] Handler wiring for the chit_parse logger happens here only.
// [LAW:one-source-of-truth] The resolved level and file path are returned as LoggingRuntime.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "chit_parse"
DEFAULT_LEVEL = "WARNING"

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3


@dataclass(frozen=True)
class LoggingRuntime:
    """What configure() settled on. file_path is None when logging to stderr only."""

    level_name: str
    level: int
    file_path: str | None


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    normalized = str(raw or DEFAULT_LEVEL).strip().upper()
    level = getattr(logging, normalized, None)
    if not isinstance(level, int):
        level = getattr(logging, DEFAULT_LEVEL)
    return str(logging.getLevelName(level)), int(level)


def _safe_name(value: str) -> str:
    candidate = "".join(ch if (ch.isalnum() or ch in {"-", "_"}) else "-" for ch in value)
    cleaned = candidate.strip("-_")
    return cleaned or "run"


def resolve_log_path(session_name: str) -> str | None:
    """Log file requested by the environment, or None for stderr only."""
    explicit = os.environ.get("CHIT_PARSE_LOG_FILE")
    if explicit:
        return explicit
    log_dir = os.environ.get("CHIT_PARSE_LOG_DIR")
    if log_dir:
        return str(Path(log_dir) / f"{_safe_name(session_name)}.log")
    return None


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _file_handler(file_path: str) -> logging.Handler:
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        file_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s pid=%(process)d %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(session_name: str = "cli") -> LoggingRuntime:
    """Attach handlers to the chit_parse logger once per process."""
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level = _parse_level(os.environ.get("CHIT_PARSE_LOG_LEVEL", DEFAULT_LEVEL))
    file_path = resolve_log_path(session_name)

    handlers = [_stderr_handler()]
    if file_path is not None:
        handlers.append(_file_handler(file_path))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME
