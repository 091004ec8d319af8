"""
Tests for diagerrors.http.client module.

Tests cover:
- Default error check for 2xx / non-2xx statuses
- Error body truncation and summary
- Successful requests
- Rejected responses raising status-bearing errors
- Transport failures wrapped with method and URL
"""

import functools
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from diagerrors.config import DiagnosticsConfig, configure
from diagerrors.errors.exceptions import DiagnosticError, HTTPError
from diagerrors.errors.status import http_status
from diagerrors.errors.unwind import unwind
from diagerrors.http.client import (
    HTTPResponse,
    check_response,
    request,
    summarize_error_body,
)


def _mock_session(status=200, body=b"", content_type="application/json"):
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.headers = {"Content-Type": content_type}
    mock_response.read = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    session = MagicMock()
    session.request = MagicMock(return_value=mock_response)
    return session


def _failing_session(exc):
    failing = MagicMock()
    failing.__aenter__ = AsyncMock(side_effect=exc)
    failing.__aexit__ = AsyncMock(return_value=None)

    session = MagicMock()
    session.request = MagicMock(return_value=failing)
    return session


class TestCheckResponse:

    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_success_statuses(self, status):
        assert check_response("GET", "https://api.test/x", status, b"") is None

    @pytest.mark.parametrize("status", [300, 400, 404, 500, 599])
    def test_error_statuses_carry_status(self, status):
        err = check_response("GET", "https://api.test/x", status, b"oops")
        assert isinstance(err, HTTPError)
        assert http_status(err) == (status, True)

    def test_error_fields(self):
        err = check_response("PUT", "https://api.test/accounts/1", 409, b"  already\n exists ")
        _, _, cause = unwind(err)
        assert cause.fields == {
            "method": "PUT",
            "url": "https://api.test/accounts/1",
            "status_code": 409,
            "body": "already exists",
        }
        assert str(err) == "PUT https://api.test/accounts/1: 409 Conflict"

    def test_unknown_status_has_no_reason(self):
        err = check_response("GET", "https://api.test/x", 599, b"")
        assert str(err) == "GET https://api.test/x: 599"

    def test_body_truncated(self):
        body = b"teststring" * 1024
        err = check_response("GET", "https://api.test/x", 500, body, error_body_max_length=1337)
        assert len(err.base.fields["body"]) == 1337

    def test_body_limit_from_config(self):
        configure(DiagnosticsConfig(error_body_max_length=5))
        err = check_response("GET", "https://api.test/x", 500, b"abcdefghij")
        assert err.base.fields["body"] == "abcde"

    def test_custom_error_summary(self):
        seen = []

        def summary(body):
            seen.append(body)
            return "summarized"

        err = check_response(
            "GET",
            "https://api.test/x",
            500,
            b"raw body",
            error_body_max_length=3,
            error_summary=summary,
        )
        assert seen == [b"raw"]
        assert err.base.fields["body"] == "summarized"


class TestSummarizeErrorBody:

    def test_collapses_whitespace(self):
        assert summarize_error_body(b"a\n\n  b\tc ") == "a b c"

    def test_invalid_utf8_replaced(self):
        assert summarize_error_body(b"ok\xff") == "ok�"


class TestRequest:

    @pytest.mark.asyncio
    async def test_successful_request(self):
        session = _mock_session(status=200, body=b'{"recvfield": "recv1"}')

        result = await request(session, "get", "https://api.test/x", json={"sendfield": "send1"})

        assert isinstance(result, HTTPResponse)
        assert result.status == 200
        assert result.json() == {"recvfield": "recv1"}
        assert result.content_type == "application/json"
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.test/x")
        assert kwargs["json"] == {"sendfield": "send1"}

    @pytest.mark.asyncio
    async def test_error_response_raises(self):
        session = _mock_session(status=404, body=b"no such account")

        with pytest.raises(HTTPError) as exc_info:
            await request(session, "GET", "https://api.test/accounts/9")

        err = exc_info.value
        assert http_status(err) == (404, True)
        assert err.base.fields["body"] == "no such account"
        assert isinstance(err.response, HTTPResponse)
        assert err.response.status == 404
        assert err.response.body == b"no such account"

    @pytest.mark.asyncio
    async def test_error_check_with_custom_summary(self):
        session = _mock_session(status=500, body=b"<html>internal</html>")
        check = functools.partial(check_response, error_summary=lambda body: "html page")

        with pytest.raises(HTTPError) as exc_info:
            await request(session, "GET", "https://api.test/x", error_check=check)

        assert exc_info.value.base.fields["body"] == "html page"
        assert exc_info.value.response.text() == "<html>internal</html>"

    @pytest.mark.asyncio
    async def test_custom_error_check(self):
        session = _mock_session(status=599, body=b"x" * 100)
        calls = []

        def lenient(method, url, status, body, max_length):
            calls.append((status, len(body), max_length))
            return None

        result = await request(
            session, "GET", "https://api.test/x", error_check=lenient, error_body_max_length=10
        )
        assert result.status == 599
        assert calls == [(599, 100, 10)]

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self):
        cause = aiohttp.ClientConnectionError("connection refused")
        session = _failing_session(cause)

        with pytest.raises(DiagnosticError) as exc_info:
            await request(session, "POST", "https://api.test/x")

        stack, wraps, root = unwind(exc_info.value)
        assert root is cause
        assert len(wraps) == 1
        assert wraps[0].fields == {"method": "POST", "url": "https://api.test/x"}
        assert wraps[0].text == "POST https://api.test/x: connection refused"
        assert http_status(exc_info.value) == (500, False)

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self):
        session = _failing_session(TimeoutError())

        with pytest.raises(DiagnosticError) as exc_info:
            await request(session, "GET", "https://api.test/slow")

        assert isinstance(exc_info.value.cause, TimeoutError)
        assert str(exc_info.value) == "GET https://api.test/slow: TimeoutError"
