"""Logging setup helpers for prioritysim.

The library is silent by default: the package attaches a NullHandler to the
``prioritysim`` logger and never configures handlers on import. Callers opt in
with one of the helpers below.

Example usage:
    import prioritysim

    prioritysim.enable_console_logging(level="DEBUG")
    prioritysim.enable_file_logging("logs/run.log")
    prioritysim.configure_from_env()

Environment variables read by configure_from_env():
    PS_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    PS_LOG_FILE: Path to a log file (enables rotating file logging)
    PS_LOG_JSON: Set to "1" for JSON lines instead of plain text
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "JsonFormatter",
    "SimClockFilter",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [t=%(sim_clock)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "prioritysim"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SimClockFilter(logging.Filter):
    """Expose the simulated clock to text formats as ``%(sim_clock)s``.

    Records without ``sim_time`` (run start, stop, replications) show ``-``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        sim_time = getattr(record, "sim_time", None)
        record.sim_clock = "-" if sim_time is None else f"{sim_time:.4f}"
        return True


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Records logged by the engine pass the simulated clock through
    ``extra={"sim_time": ...}``; when present it is emitted as its own field so
    log lines can be ordered by simulated rather than wall-clock time.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        sim_time = getattr(record, "sim_time", None)
        if sim_time is not None:
            payload["sim_time"] = sim_time
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Detach and close every non-null handler on the library logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install(handler: logging.Handler, level: LogLevel | int) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    handler.addFilter(SimClockFilter())
    logger.addHandler(handler)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Log to stderr.

    Args:
        level: Log level name or int.
        format: Format string for records. ``%(sim_clock)s`` is the simulated
            time of the record, or ``-`` when it has none.
        date_format: Format for %(asctime)s.

    Returns:
        The installed StreamHandler.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format, date_format))
    _install(handler, level)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    json_lines: bool = False,
) -> RotatingFileHandler:
    """Log to a size-rotated file, creating parent directories as needed.

    Args:
        path: Log file location.
        level: Log level name or int.
        max_bytes: Rotate once the file reaches this size.
        backup_count: Number of rotated files kept.
        json_lines: Use JsonFormatter instead of the plain text format.

    Returns:
        The installed RotatingFileHandler.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    if json_lines:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, DEFAULT_DATE_FORMAT))
    _install(handler, level)
    return handler


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Log JSON lines to stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    _install(handler, level)
    return handler


def configure_from_env() -> None:
    """Configure logging from PS_LOGGING, PS_LOG_FILE and PS_LOG_JSON.

    Does nothing when neither a level nor a log file is set.
    """
    level = os.environ.get("PS_LOGGING", "").upper()
    log_file = os.environ.get("PS_LOG_FILE", "")
    use_json = os.environ.get("PS_LOG_JSON", "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"

    if log_file:
        enable_file_logging(log_file, level=level, json_lines=use_json)
    elif use_json:
        enable_json_logging(level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Set the level of the library logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the level of one submodule logger.

    Example:
        >>> prioritysim.set_module_level("simulation", "DEBUG")
        >>> prioritysim.set_module_level("entities.buffer", "WARNING")
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove every handler and silence the library logger."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
