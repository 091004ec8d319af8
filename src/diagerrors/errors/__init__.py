"""
Diagnostic errors.

Provides:
- Frame capture for call stacks
- DiagnosticError and its records (BaseError, WrapRecord)
- Constructors and wrapping (new, newf, wrap, wrapf, with_stack)
- HTTP status helpers (not_found, new_http_error, http_status)
- unwind and the serialized record schemas
- Fault-recovery boundary
"""

from diagerrors.errors.exceptions import (
    MESSAGE_SEPARATOR,
    # Records and exceptions
    BaseError,
    DiagnosticError,
    HTTPError,
    StatusError,
    WrapRecord,
    error_message,
)
from diagerrors.errors.fields import merge_fields
from diagerrors.errors.frames import (
    Frame,
    caller,
    capture_stack,
    frames_from_traceback,
    function_frame,
)
from diagerrors.errors.recovery import (
    RecoveredFault,
    fault_boundary,
    recover_faults,
    to_error,
)
from diagerrors.errors.schemas import (
    DiagnosticRecord,
    FrameRecord,
    LayerRecord,
    SerializedCause,
    parse_record,
    render,
    to_json,
    to_record,
)
from diagerrors.errors.status import http_status
from diagerrors.errors.unwind import Unwound, unwind
from diagerrors.errors.wrap import (
    new,
    new_http_error,
    newf,
    not_found,
    with_stack,
    wrap,
    wrapf,
)

__all__ = [
    # Frames
    "Frame",
    "capture_stack",
    "caller",
    "frames_from_traceback",
    "function_frame",
    # Records and exceptions
    "MESSAGE_SEPARATOR",
    "BaseError",
    "StatusError",
    "WrapRecord",
    "DiagnosticError",
    "HTTPError",
    "error_message",
    "merge_fields",
    # Constructors and wrapping
    "new",
    "newf",
    "wrap",
    "wrapf",
    "with_stack",
    "not_found",
    "new_http_error",
    # Classification and unwinding
    "http_status",
    "Unwound",
    "unwind",
    # Serialization
    "DiagnosticRecord",
    "FrameRecord",
    "LayerRecord",
    "SerializedCause",
    "render",
    "to_record",
    "to_json",
    "parse_record",
    # Recovery
    "RecoveredFault",
    "fault_boundary",
    "recover_faults",
    "to_error",
]
