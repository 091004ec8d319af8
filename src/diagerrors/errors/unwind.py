"""Flatten a diagnostic error into its (stack, wraps, cause) triple."""

from typing import NamedTuple, Optional, Tuple

from diagerrors.errors.exceptions import DiagnosticError, WrapRecord
from diagerrors.errors.frames import Frame, frames_from_traceback


class Unwound(NamedTuple):
    """Flattened view of an error used for logging and testing."""

    stack: Tuple[Frame, ...]
    wraps: Tuple[WrapRecord, ...]
    cause: Optional[BaseException]


def unwind(err: Optional[BaseException]) -> Unwound:
    """
    Return the stack, wrap records and root cause of ``err``.

    The outermost DiagnosticError already holds the complete stack and the
    full, chronologically ordered wrap list, so nothing is traversed.

    For an exception that never entered the diagnostic system the stack comes
    from its traceback (empty if it was never raised), there are no wraps, and
    the cause is the exception itself.
    """
    if err is None:
        return Unwound((), (), None)
    if isinstance(err, DiagnosticError):
        return Unwound(err.stack, err.wraps, err.cause)
    return Unwound(frames_from_traceback(err.__traceback__), (), err)


__all__ = ["Unwound", "unwind"]
