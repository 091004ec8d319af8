"""
HTTP request helpers built on the diagnostic error core.

Provides the boundary used by HTTP clients: a default error check that turns
non-2xx responses into status-bearing diagnostic errors, and an aiohttp
request helper that annotates transport failures with the request method and
URL.
"""

import json as jsonlib
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Dict, Optional

import aiohttp

from diagerrors.config import get_config
from diagerrors.errors.exceptions import DiagnosticError
from diagerrors.errors.wrap import new_http_error, wrapf

ErrorSummary = Callable[[bytes], str]
ErrorCheck = Callable[[str, str, int, bytes, Optional[int]], Optional[DiagnosticError]]


@dataclass
class HTTPResponse:
    """Response from an HTTP request with content and metadata."""

    status: int
    body: bytes
    content_type: str | None = None
    headers: Dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return jsonlib.loads(self.body)

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")


def summarize_error_body(body: bytes) -> str:
    """Decode an error body and collapse whitespace into single spaces."""
    text = body.decode("utf-8", errors="replace")
    return " ".join(text.split())


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def check_response(
    method: str,
    url: str,
    status: int,
    body: bytes,
    error_body_max_length: Optional[int] = None,
    error_summary: ErrorSummary = summarize_error_body,
) -> Optional[DiagnosticError]:
    """
    Default error check: any status outside 2xx is an error.

    The returned error carries ``status`` (so ``http_status`` reports it as
    deliberate) and fields method, url, status_code and body, where body is a
    summary of at most ``error_body_max_length`` bytes of the response.

    Args:
        method: Request method
        url: Request URL
        status: Response status code
        body: Raw response body
        error_body_max_length: Bytes of body kept (default: from config)
        error_summary: Turns the truncated body into the ``body`` field

    Returns:
        None for 2xx responses, else an HTTPError
    """
    if 200 <= status < 300:
        return None

    if error_body_max_length is None:
        error_body_max_length = get_config().error_body_max_length

    text = f"{method} {url}: {status} {_reason(status)}".rstrip()
    return new_http_error(status, text).with_fields(
        {
            "method": method,
            "url": url,
            "status_code": status,
            "body": error_summary(body[:error_body_max_length]),
        }
    )


async def request(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    json: Any = None,
    data: Any = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 60,
    error_check: ErrorCheck = check_response,
    error_body_max_length: Optional[int] = None,
) -> HTTPResponse:
    """
    Send a request and return the response, raising diagnostic errors.

    Args:
        session: aiohttp ClientSession (caller manages lifecycle)
        method: Request method
        url: Request URL
        json: JSON-serializable body
        data: Raw body
        headers: Extra request headers
        timeout: Total timeout in seconds
        error_check: Callable deciding whether a response is an error
        error_body_max_length: Bytes of error body passed to the error check

    Returns:
        HTTPResponse for responses accepted by ``error_check``

    Raises:
        DiagnosticError: Transport failure (wrapping the aiohttp/timeout
            exception) or a response rejected by ``error_check``; the
            rejected HTTPResponse is available as ``err.response``
    """
    method = method.upper()
    try:
        async with session.request(
            method,
            url,
            json=json,
            data=data,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as response:
            body = await response.read()
            result = HTTPResponse(
                status=response.status,
                body=body,
                content_type=response.headers.get("Content-Type"),
                headers=dict(response.headers),
            )
    except (TimeoutError, aiohttp.ClientError) as e:
        raise wrapf(e, {"method": method, "url": url}, "%s %s", method, url) from e

    err = error_check(method, url, result.status, result.body, error_body_max_length)
    if err is not None:
        err.response = result
        raise err
    return result


__all__ = [
    "ErrorCheck",
    "ErrorSummary",
    "HTTPResponse",
    "check_response",
    "request",
    "summarize_error_body",
]
