"""Context variables for structured logging."""

from contextvars import ContextVar
from typing import Dict, Optional

_trace_id: ContextVar[str] = ContextVar("trace_id", default="")
_operation: ContextVar[str] = ContextVar("operation", default="")
_component: ContextVar[str] = ContextVar("component", default="")


def set_log_context(
    trace_id: Optional[str] = None,
    operation: Optional[str] = None,
    component: Optional[str] = None,
) -> None:
    if trace_id is not None:
        _trace_id.set(trace_id)
    if operation is not None:
        _operation.set(operation)
    if component is not None:
        _component.set(component)


def get_log_context() -> Dict[str, str]:
    return {
        "trace_id": _trace_id.get(),
        "operation": _operation.get(),
        "component": _component.get(),
    }


def clear_log_context() -> None:
    _trace_id.set("")
    _operation.set("")
    _component.set("")
