"""HTTP status classification for errors."""

from http import HTTPStatus
from typing import Optional, Tuple

from diagerrors.errors.exceptions import DiagnosticError
from diagerrors.types import HTTPStatusProvider


def _status_of(err: BaseException) -> Optional[int]:
    if isinstance(err, HTTPStatusProvider) and callable(err.http_status):
        return int(err.http_status())
    return None


def http_status(err: Optional[BaseException]) -> Tuple[int, bool]:
    """
    Extract an HTTP status from ``err``.

    Rules, in order:
    - None: (200, False)
    - ``err`` exposes ``http_status()``, or is a DiagnosticError whose cause
      does: (that status, True)
    - anything else: (500, False)

    The boolean tells callers whether the status was chosen deliberately, so
    they can still fall back to the default for generic error responses.
    """
    if err is None:
        return int(HTTPStatus.OK), False

    status = _status_of(err)
    if status is None and isinstance(err, DiagnosticError):
        status = _status_of(err.cause)

    if status is not None:
        return status, True
    return int(HTTPStatus.INTERNAL_SERVER_ERROR), False


__all__ = ["http_status"]
