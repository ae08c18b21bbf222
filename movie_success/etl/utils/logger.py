"""Pipeline logging: one configured root for the package, plain children.

Modules inside the package log through ``logging.getLogger(__name__)``;
their records propagate to the ``movie_success`` logger, which is the only
one carrying handlers (stdout plus a dated file under the log directory).
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGER = "movie_success"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure and return a logger with console and file handlers.

    Args:
        name: Logger name (default: the package logger).
        level: Level as an int or a name such as "DEBUG".
        log_dir: Directory for log files (default: ``settings.logging.log_dir``).

    Returns:
        Configured logger instance, cached per name.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    numeric_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_create_console_handler(formatter, numeric_level))

    file_handler = _create_file_handler(name, formatter, numeric_level, log_dir)
    if file_handler:
        logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def setup_from_settings() -> logging.Logger:
    """Configure the package logger from ``settings.logging``."""
    from movie_success.settings import settings

    return setup_logger(
        PACKAGE_LOGGER,
        level=settings.logging.level,
        log_dir=settings.logging.log_dir,
    )


def _resolve_level(level: int | str) -> int:
    """Translate a level name to its numeric value.

    Raises:
        ValueError: If the name is not a standard level.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    """Create a stdout handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path | None,
) -> logging.FileHandler | None:
    """Create a handler writing to ``<log_dir>/<name>_<YYYYMMDD>.log``.

    Returns:
        Configured FileHandler, or None when the directory is not writable.
    """
    try:
        log_path = _get_log_file_path(name, log_dir)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _get_log_file_path(name: str, log_dir: Path | None) -> Path:
    """Build the dated log file path, creating its directory."""
    if log_dir is None:
        from movie_success.settings import settings

        log_dir = settings.logging.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(".", "_").replace("/", "_")
    return log_dir / f"{safe_name}_{datetime.now():%Y%m%d}.log"
