"""Logging setup and configuration."""

import logging
import sys
from pathlib import Path
from typing import IO, Optional

from diagerrors.config import DiagnosticsConfig, get_config
from diagerrors.logging.context import set_log_context
from diagerrors.logging.formatters import ConsoleFormatter, JSONFormatter

# Noisy loggers to suppress
NOISY_LOGGERS = [
    "urllib3",
    "aiohttp",
    "asyncio",
]


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    config: Optional[DiagnosticsConfig] = None,
    level: int | str | None = None,
    json_format: Optional[bool] = None,
    stream: Optional[IO[str]] = None,
    log_file: Optional[Path] = None,
    component: str | None = None,
    suppress_noisy: bool = True,
) -> logging.Logger:
    """
    Configure the root logger with a console (or JSON) stream handler.

    Explicit arguments win over the config; the config defaults to the
    active one from ``diagerrors.config.get_config()``.

    Args:
        config: DiagnosticsConfig supplying log_level and json_logs
        level: Root log level (name or number)
        json_format: Emit JSON lines instead of console format
        stream: Output stream (default: stdout)
        log_file: Optional file that always receives JSON lines
        component: Component name injected into log context
        suppress_noisy: Quiet down HTTP client and asyncio loggers

    Returns:
        Configured root logger
    """
    config = config or get_config()
    level = _resolve_level(level if level is not None else config.log_level)
    json_format = config.json_logs if json_format is None else json_format

    if component:
        set_log_context(component=component)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else ConsoleFormatter())
    root_logger.addHandler(handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    if suppress_noisy:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Use this instead of logging.getLogger() to ensure consistent naming.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
