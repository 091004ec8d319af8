"""
Constructors and wrapping operations.

Native constructors (``new``, ``newf``, ``not_found``, ``new_http_error``)
create an error whose root is a BaseError. ``wrap``/``wrapf``/``with_stack``
either append a layer to an existing DiagnosticError or, for any other
exception, become the point where the error enters the diagnostic system.

Typical use::

    def load_user(user_id):
        try:
            row = db.fetch(user_id)
        except DatabaseError as e:
            raise wrapf(e, {"user_id": user_id}, "load user %s", user_id) from e
        if row is None:
            raise not_found({"user_id": user_id}, "user does not exist")
        return row

Internal helpers take ``skip``, the count of library frames between the
helper and user code; each public function passes ``skip=1`` for its own
frame.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from diagerrors.config import get_config
from diagerrors.errors.exceptions import (
    UNKNOWN_FRAME,
    BaseError,
    DiagnosticError,
    HTTPError,
    StatusError,
    WrapRecord,
    compose_message,
    error_message,
)
from diagerrors.errors.fields import freeze_fields
from diagerrors.errors.frames import Frame, capture_stack

logger = logging.getLogger(__name__)

# Frames kept by new_http_error, which is meant to be called at the error site
HTTP_ERROR_STACK_DEPTH = 3

NOT_FOUND = 404


def _format(fmt: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return fmt
    return fmt % args


def _capture(skip: int, limit: Optional[int] = None) -> Tuple[Tuple[Frame, ...], Frame]:
    if limit is None:
        limit = get_config().max_stack_depth
    # +1 for this helper
    stack = capture_stack(skip + 1, limit=limit)
    location = stack[0] if stack else UNKNOWN_FRAME
    return stack, location


def _new(
    fields: Optional[Mapping[str, Any]],
    text: str,
    skip: int,
    status: Optional[int] = None,
    limit: Optional[int] = None,
) -> DiagnosticError:
    stack, location = _capture(skip + 1, limit)
    if status is None:
        return DiagnosticError(stack, base=BaseError(text, fields, location, stack))
    base = StatusError(text, status, fields, location, stack)
    return HTTPError(stack, base=base)


def _wrap(
    err: Optional[BaseException],
    fields: Optional[Mapping[str, Any]],
    text: str,
    skip: int,
) -> Optional[DiagnosticError]:
    if err is None:
        return None

    if isinstance(err, DiagnosticError):
        _, location = _capture(skip + 1, limit=1)
        record = WrapRecord(freeze_fields(fields), location, compose_message(text, str(err)))
        return err.append_wrap(record)

    if not isinstance(err, BaseException):
        raise TypeError(f"cannot wrap {type(err).__name__}: not an exception")

    stack, location = _capture(skip + 1)
    record = WrapRecord(
        freeze_fields(fields), location, compose_message(text, error_message(err))
    )
    logger.debug(
        "Foreign error entered diagnostics",
        extra={"error_type": type(err).__name__, "operation": location.function},
    )
    return DiagnosticError(stack, wraps=(record,), foreign_cause=err)


def new(fields: Optional[Mapping[str, Any]], text: str) -> DiagnosticError:
    """
    Create a DiagnosticError that is its own root cause.

    Args:
        fields: Key/value context for the root record
        text: Error message

    Returns:
        DiagnosticError with the stack captured at the caller and no wraps
    """
    return _new(fields, text, skip=1)


def newf(fields: Optional[Mapping[str, Any]], fmt: str, *args: Any) -> DiagnosticError:
    """As ``new`` with a %-style formatted message."""
    return _new(fields, _format(fmt, args), skip=1)


def wrap(
    err: Optional[BaseException], fields: Optional[Mapping[str, Any]] = None
) -> Optional[DiagnosticError]:
    """
    Annotate ``err`` with ``fields`` at the caller's location.

    Returns None when ``err`` is None so call sites can wrap unconditionally.
    """
    return _wrap(err, fields, "", skip=1)


def wrapf(
    err: Optional[BaseException],
    fields: Optional[Mapping[str, Any]],
    fmt: str,
    *args: Any,
) -> Optional[DiagnosticError]:
    """
    Annotate ``err`` with ``fields`` and a formatted message.

    The layer's text is ``"<formatted>: <str(err)>"``.

    Returns None when ``err`` is None.
    """
    return _wrap(err, fields, _format(fmt, args), skip=1)


def with_stack(err: Optional[BaseException], skip: int = 0) -> Optional[DiagnosticError]:
    """
    Convert ``err`` into a DiagnosticError with no extra context.

    Intended for the payload of a recovered fault. Behaves as ``wrap`` with
    empty fields, so exactly one wrap record is added.

    Args:
        err: Exception to convert
        skip: Additional caller frames to skip when capturing the stack
    """
    return _wrap(err, None, "", skip=1 + skip)


def not_found(fields: Optional[Mapping[str, Any]], text: str) -> HTTPError:
    """Create a root error carrying HTTP status 404."""
    return _new(fields, text, skip=1, status=NOT_FOUND)


def new_http_error(status: int, text: str) -> HTTPError:
    """
    Create a root error carrying ``status``.

    Only the innermost three frames are captured; this constructor is meant to
    be called directly at the site that decided on the status.
    """
    return _new(None, text, skip=1, status=status, limit=HTTP_ERROR_STACK_DEPTH)


__all__ = [
    "HTTP_ERROR_STACK_DEPTH",
    "new",
    "newf",
    "wrap",
    "wrapf",
    "with_stack",
    "not_found",
    "new_http_error",
]
