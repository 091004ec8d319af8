"""HTTP boundary: response error checks and annotated requests."""

from diagerrors.http.client import (
    ErrorCheck,
    ErrorSummary,
    HTTPResponse,
    check_response,
    request,
    summarize_error_body,
)

__all__ = [
    "ErrorCheck",
    "ErrorSummary",
    "HTTPResponse",
    "check_response",
    "request",
    "summarize_error_body",
]
