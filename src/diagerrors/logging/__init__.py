"""
Structured logging module.

Provides JSON logging with context propagation and diagnostic-record
rendering for errors.
"""

from diagerrors.logging.context import (
    clear_log_context,
    get_log_context,
    set_log_context,
)
from diagerrors.logging.context_managers import LogContext, OperationContext
from diagerrors.logging.formatters import ConsoleFormatter, JSONFormatter
from diagerrors.logging.setup import get_logger, setup_logging
from diagerrors.logging.utilities import log_exception, log_with_context

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    # Context
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    # Context Managers
    "LogContext",
    "OperationContext",
    # Utilities
    "log_with_context",
    "log_exception",
]
