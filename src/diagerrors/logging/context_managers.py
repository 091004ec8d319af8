"""Context managers for structured logging."""

import logging
import time
from typing import Any, Dict, Optional

from diagerrors.logging.context import get_log_context, set_log_context
from diagerrors.logging.utilities import log_exception, log_with_context


class LogContext:
    """
    Context manager for temporary log context.

    Usage:
        with LogContext(trace_id=request_id, component="billing"):
            # All logs in this block will have trace_id and component
            do_work()
    """

    def __init__(
        self,
        trace_id: Optional[str] = None,
        operation: Optional[str] = None,
        component: Optional[str] = None,
    ):
        self.new_context = {
            "trace_id": trace_id,
            "operation": operation,
            "component": component,
        }
        self.old_context: Dict[str, str] = {}

    def __enter__(self) -> "LogContext":
        self.old_context = get_log_context()
        set_log_context(**self.new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        set_log_context(**self.old_context)
        return False


class OperationContext:
    """
    Context manager for timed operations with automatic logging.

    Failures are logged through ``log_exception`` so the diagnostic record of
    the escaping error is attached; the exception is never suppressed.
    """

    def __init__(
        self,
        logger: logging.Logger,
        operation: str,
        level: int = logging.DEBUG,
        slow_threshold_ms: Optional[float] = 1000.0,
        **context: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.slow_threshold_ms = slow_threshold_ms
        self.context = context
        self._start_time: Optional[float] = None

    def __enter__(self) -> "OperationContext":
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.perf_counter() - self._start_time) * 1000

        # Auto-promote to INFO if slow
        effective_level = self.level
        if self.slow_threshold_ms and duration_ms > self.slow_threshold_ms:
            effective_level = max(self.level, logging.INFO)

        if exc_val is not None:
            log_exception(
                self.logger,
                exc_val,
                f"Failed: {self.operation}",
                duration_ms=round(duration_ms, 2),
                operation=self.operation,
                **self.context,
            )
        else:
            log_with_context(
                self.logger,
                effective_level,
                f"Completed: {self.operation}",
                duration_ms=round(duration_ms, 2),
                operation=self.operation,
                **self.context,
            )
        return False

    def add_context(self, **kwargs: Any) -> None:
        """Add context mid-operation."""
        self.context.update(kwargs)
