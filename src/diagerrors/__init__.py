"""
diagerrors: structured errors with causal diagnostics.

Application code annotates a failure with key/value fields and a message at
each layer it passes through. The library keeps the original failure, the
call stack where the failure entered the diagnostic system, and an ordered
record of every annotation layer applied afterwards.

Modules:
    errors   - DiagnosticError, wrapping, unwind, HTTP status, fault recovery
    logging  - Structured JSON logging that renders diagnostic records
    http     - Default HTTP error check and annotated aiohttp requests
    config   - YAML configuration

Design Principles:
    - Error values are never mutated once returned
    - The stack is captured once, at first entry
    - Wrap records only grow, in chronological order
"""

from .errors import (
    BaseError,
    DiagnosticError,
    Frame,
    HTTPError,
    StatusError,
    Unwound,
    WrapRecord,
    fault_boundary,
    http_status,
    new,
    new_http_error,
    newf,
    not_found,
    parse_record,
    recover_faults,
    to_json,
    to_record,
    unwind,
    with_stack,
    wrap,
    wrapf,
)
from .types import Fields, HTTPStatusProvider

__version__ = "0.1.0"

__all__ = [
    "Fields",
    "HTTPStatusProvider",
    "Frame",
    "BaseError",
    "StatusError",
    "WrapRecord",
    "DiagnosticError",
    "HTTPError",
    "Unwound",
    "new",
    "newf",
    "wrap",
    "wrapf",
    "with_stack",
    "not_found",
    "new_http_error",
    "http_status",
    "unwind",
    "to_record",
    "to_json",
    "parse_record",
    "fault_boundary",
    "recover_faults",
]
