"""Log formatters for JSON and console output."""

import json
import logging
import re
import sys
from datetime import UTC, datetime
from typing import Any

from diagerrors.errors.exceptions import DiagnosticError
from diagerrors.errors.schemas import to_record
from diagerrors.errors.status import http_status
from diagerrors.logging.context import get_log_context
from diagerrors.utils.json_serializers import json_serializer


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter with context and diagnostic injection.

    Produces one JSON object per line for easy parsing with jq/grep.
    When a record carries an exception, the unwound diagnostic record
    (stack, wraps, cause) and its HTTP status are included.
    Sanitizes URLs to remove sensitive tokens before logging.
    """

    # Fields to extract from LogRecord extras
    EXTRA_FIELDS = [
        # Correlation
        "trace_id",
        "duration_ms",
        # HTTP
        "http_status",
        "http_method",
        "http_url",
        "status_code",
        # Errors
        "error_message",
        "error_type",
        "error_fields",
        # Operation tracking
        "operation",
        "component",
    ]

    # Type mapping for numeric fields
    NUMERIC_FIELDS = {
        "duration_ms": float,
        "http_status": int,
        "status_code": int,
    }

    # Fields that contain URLs and should be sanitized
    URL_FIELDS = ["url", "http_url"]

    # Pattern to match sensitive query parameters
    SENSITIVE_PARAMS_PATTERN = re.compile(
        r"([?&])(sig|token|key|secret|password|auth)=[^&]*",
        re.IGNORECASE,
    )

    def _sanitize_url(self, url: str) -> str:
        return self.SENSITIVE_PARAMS_PATTERN.sub(r"\1\2=[REDACTED]", url)

    def _sanitize_value(self, key: str, value: Any) -> Any:
        if key in self.URL_FIELDS and isinstance(value, str):
            return self._sanitize_url(value)
        return value

    def _ensure_type(self, field: str, value: Any) -> Any:
        """
        Ensure numeric fields keep their numeric type.

        Returns None when conversion fails.
        """
        if field not in self.NUMERIC_FIELDS or value is None:
            return value

        expected_type = self.NUMERIC_FIELDS[field]
        try:
            return expected_type(value)
        except (ValueError, TypeError):
            return None

    @staticmethod
    def _base_log_entry(record: logging.LogRecord) -> dict[str, Any]:
        return {
            "ts": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

    @staticmethod
    def _inject_context(log_entry: dict[str, Any], log_context: dict[str, Any]) -> None:
        for field, value in log_context.items():
            if value:
                log_entry[field] = value

    @staticmethod
    def _should_include_source_location(record: logging.LogRecord) -> bool:
        return record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL)

    def _inject_extra_fields(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                typed_value = self._ensure_type(field, value)
                log_entry[field] = self._sanitize_value(field, typed_value)

    def _sanitize_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        return {k: self._sanitize_value(k, v) for k, v in fields.items()}

    def _inject_exception(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        if not record.exc_info:
            return

        exc_type, exc_value, _ = record.exc_info
        log_entry["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
        }
        if exc_value is None:
            return

        diagnostic = to_record(exc_value)
        for layer in diagnostic["wraps"]:
            layer["fields"] = self._sanitize_fields(layer["fields"])
        if isinstance(diagnostic["cause"], dict):
            diagnostic["cause"]["fields"] = self._sanitize_fields(diagnostic["cause"]["fields"])
        log_entry["diagnostic"] = diagnostic

        status, deliberate = http_status(exc_value)
        if deliberate:
            log_entry.setdefault("http_status", status)

        # Diagnostic errors carry their own stack; plain exceptions keep the traceback
        if not isinstance(exc_value, DiagnosticError):
            log_entry["exception"]["stacktrace"] = self.formatException(record.exc_info)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line."""
        log_entry = self._base_log_entry(record)

        self._inject_context(log_entry, get_log_context())

        if self._should_include_source_location(record):
            log_entry["file"] = f"{record.filename}:{record.lineno}"

        self._inject_extra_fields(log_entry, record)
        self._inject_exception(log_entry, record)

        return json.dumps(log_entry, default=json_serializer, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with color-coded log levels.

    Colors are auto-disabled when output is not a TTY (pipes, files).
    Diagnostic errors are rendered as their wrap chain, outermost first,
    followed by the capture site.
    """

    COLORS = {
        logging.DEBUG: "\033[36m",  # Cyan
        logging.INFO: "\033[32m",  # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._use_colors = sys.stdout.isatty()

    def _format_level_name(self, record: logging.LogRecord) -> str:
        level_name = record.levelname
        if not self._use_colors:
            return level_name

        color = self.COLORS.get(record.levelno, "")
        if not color:
            return level_name

        return f"{color}{level_name}{self.RESET}"

    @staticmethod
    def _build_prefix(level_name: str, log_context: dict[str, Any]) -> str:
        parts = [
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            level_name,
        ]
        if log_context["component"]:
            parts.append(f"[{log_context['component']}]")
        if log_context["operation"]:
            parts.append(f"[{log_context['operation']}]")

        return " - ".join(parts)

    @staticmethod
    def _format_diagnostic(err: DiagnosticError) -> str:
        lines = []
        for layer in reversed(err.wraps):
            lines.append(f"    at {layer.location}: {layer.fields}")
        if err.base is not None:
            lines.append(f"    at {err.base.location}: {err.base.fields}")
        if err.stack:
            lines.append(f"    captured at {err.stack[0]}")
        return "\n".join(lines)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output with optional color coding."""
        log_context = get_log_context()

        level_name = self._format_level_name(record)
        prefix = self._build_prefix(level_name, log_context)

        trace_id = getattr(record, "trace_id", None) or log_context.get("trace_id")
        line = f"{prefix} - {record.getMessage()}"
        if trace_id:
            line = f"{prefix} - [{trace_id[:8]}] {record.getMessage()}"

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            if isinstance(exc, DiagnosticError):
                line = f"{line}\n  {exc}\n{self._format_diagnostic(exc)}"
            else:
                line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
