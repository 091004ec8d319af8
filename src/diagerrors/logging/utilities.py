"""Logging utility functions."""

import logging
from typing import Any

from diagerrors.errors.status import http_status
from diagerrors.errors.unwind import unwind

# Reserved LogRecord attribute names that cannot be used in extra dict
_RESERVED_LOG_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "asctime",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)

# Error messages longer than this are truncated in the error_message field
MAX_ERROR_MESSAGE_LENGTH = 500


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    **kwargs: Any,
) -> None:
    """
    Log with structured context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields (trace_id, duration_ms, etc.)
                  Note: exc_info=True is supported and handled specially.

    Example:
        log_with_context(
            logger, logging.INFO, "Request complete",
            trace_id=trace_id,
            duration_ms=elapsed,
            http_status=200,
        )
    """
    exc_info = kwargs.pop("exc_info", None)
    extra = {k: v for k, v in kwargs.items() if k not in _RESERVED_LOG_KEYS}
    logger.log(level, msg, exc_info=exc_info, extra=extra)


def log_exception(
    logger: logging.Logger,
    exc: BaseException,
    msg: str,
    level: int = logging.ERROR,
    include_traceback: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log exception with context and its diagnostic record.

    Adds error_message, error_type, the fields of the cause when it is a
    native root record, and http_status when the error carries one. With
    ``include_traceback`` the exception is attached as exc_info so the JSON
    formatter renders the full (stack, wraps, cause) record.

    Args:
        logger: Logger instance
        exc: Exception to log
        msg: Context message
        level: Log level (default: ERROR)
        include_traceback: Attach exception info (default: True)
        **kwargs: Additional context fields

    Example:
        try:
            sync_account(account_id)
        except Exception as e:
            log_exception(logger, e, "Account sync failed", trace_id=trace_id)
    """
    status, deliberate = http_status(exc)
    if deliberate and "http_status" not in kwargs:
        kwargs["http_status"] = status

    _, _, cause = unwind(exc)
    kwargs.setdefault("error_type", type(cause).__name__)
    cause_fields = getattr(cause, "fields", None)
    if isinstance(cause_fields, dict) and cause_fields:
        kwargs.setdefault("error_fields", cause_fields)

    error_msg = str(exc)
    if len(error_msg) > MAX_ERROR_MESSAGE_LENGTH:
        error_msg = error_msg[:MAX_ERROR_MESSAGE_LENGTH] + "..."
    kwargs["error_message"] = error_msg

    extra = {k: v for k, v in kwargs.items() if k not in _RESERVED_LOG_KEYS}
    if include_traceback:
        logger.log(level, msg, exc_info=exc, extra=extra)
    else:
        logger.log(level, msg, extra=extra)
