"""
Fault-recovery boundary.

Converts an exception escaping a function edge into a DiagnosticError through
``with_stack``. Nothing differs from the ordinary wrap path: the stack is
whatever is on the call stack at the recovery point, and exactly one wrap
record is added.

Usage:
    with fault_boundary():
        run_job()

    boundary = fault_boundary(reraise=False)
    with boundary:
        run_job()
    if boundary.error is not None:
        log_exception(logger, boundary.error, "Job failed")

    @recover_faults
    async def handle(message):
        ...
"""

import functools
import inspect
import logging
from dataclasses import replace
from typing import Any, Callable, NoReturn, Optional, TypeVar

from diagerrors.errors.exceptions import DiagnosticError
from diagerrors.errors.frames import Frame, function_frame
from diagerrors.errors.wrap import with_stack

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class RecoveredFault(Exception):
    """Exception synthesized for a fault payload that is not an exception."""

    def __init__(self, payload: Any):
        self.payload = payload
        super().__init__(f"panic: {payload}")


def to_error(payload: Any) -> BaseException:
    """Return ``payload`` if it is an exception, else wrap it in RecoveredFault."""
    if isinstance(payload, BaseException):
        return payload
    return RecoveredFault(payload)


class fault_boundary:
    """
    Context manager converting exceptions raised in its block.

    Only ``Exception`` subclasses are intercepted; KeyboardInterrupt,
    SystemExit and other BaseExceptions propagate untouched.

    Args:
        reraise: Raise the converted DiagnosticError (chained to the original).
            When False the error is stored on ``error`` and suppressed.

    Attributes:
        error: Converted DiagnosticError, once a fault was caught
        fault: The exception that left the block
    """

    def __init__(self, reraise: bool = True):
        self.reraise = reraise
        self.error: Optional[DiagnosticError] = None
        self.fault: Optional[Exception] = None

    def __enter__(self) -> "fault_boundary":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None or not isinstance(exc_val, Exception):
            return False

        self.fault = exc_val
        # skip=1 drops __exit__ so the first frame is the `with` statement
        self.error = with_stack(to_error(exc_val), skip=1)
        logger.debug(
            "Recovered fault",
            extra={"error_type": type(exc_val).__name__, "error_message": str(exc_val)},
        )
        if self.reraise:
            raise self.error from exc_val
        return True


def _raise_from_function(boundary: fault_boundary, location: Frame) -> NoReturn:
    # The recovery layer is attributed to the decorated function, not the wrapper
    err = boundary.error
    record = replace(err.wraps[-1], location=location)
    raise err.replace_wrap(record) from boundary.fault


def recover_faults(func: F) -> F:
    """
    Decorator form of ``fault_boundary``; supports sync and async functions.

    The wrap record added on recovery is located at the decorated function's
    definition, so the diagnostic names the function that faulted.
    """
    location = function_frame(func)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            boundary = fault_boundary(reraise=False)
            with boundary:
                return await func(*args, **kwargs)
            _raise_from_function(boundary, location)

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        boundary = fault_boundary(reraise=False)
        with boundary:
            return func(*args, **kwargs)
        _raise_from_function(boundary, location)

    return wrapper  # type: ignore[return-value]


__all__ = ["RecoveredFault", "fault_boundary", "recover_faults", "to_error"]
