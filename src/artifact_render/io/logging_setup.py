"""Logging bootstrap for the ``artifact_render`` logger tree.

Everything at the configured level goes to one size-rotated log file;
only warnings and errors also reach stderr, so rendered output on the
terminal stays clean.

Environment:
    ARTIFACT_RENDER_LOG_LEVEL  level name, default INFO
    ARTIFACT_RENDER_LOG_FILE   explicit log file path
    ARTIFACT_RENDER_LOG_DIR    directory for artifact-render.log when no file is given

// [LAW:single-enforcer] Only this module attaches handlers.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOGGER_NAME = "artifact_render"
LOG_FILE_NAME = "artifact-render.log"
DEFAULT_LOG_DIR = "~/.local/state/artifact-render"

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_STDERR_FORMAT = "artifact-render %(levelname)s: %(message)s"


@dataclass(frozen=True)
class LoggingRuntime:
    level: int
    file_path: Path

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


_runtime: LoggingRuntime | None = None


def resolve_level(raw: str | None) -> int:
    """Map a level name to its number; unknown or empty names mean INFO."""
    level = logging.getLevelName((raw or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def resolve_log_file() -> Path:
    explicit = os.environ.get("ARTIFACT_RENDER_LOG_FILE")
    if explicit:
        return Path(explicit)
    log_dir = os.environ.get("ARTIFACT_RENDER_LOG_DIR") or DEFAULT_LOG_DIR
    return Path(log_dir).expanduser() / LOG_FILE_NAME


def configure() -> LoggingRuntime:
    """Attach the file and stderr handlers once; later calls return the same runtime."""
    global _runtime
    if _runtime is not None:
        return _runtime

    level = resolve_level(os.environ.get("ARTIFACT_RENDER_LOG_LEVEL"))
    file_path = resolve_log_file()
    file_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        file_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(_FORMAT))

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(max(level, logging.WARNING))
    stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers[:] = [file_handler, stderr_handler]

    _runtime = LoggingRuntime(level=level, file_path=file_path)
    return _runtime


def get_runtime() -> LoggingRuntime | None:
    return _runtime


def reset() -> None:
    """Detach and close handlers, forgetting the runtime (tests only)."""
    global _runtime
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _runtime = None
