"""
Serialized diagnostic record schemas.

Contains Pydantic models for the JSON-shaped record produced from an unwound
error and consumed by logging/observability collaborators.

Record shape:
    {
        "stack": [{"file": ..., "func": ..., "line": ...}, ...],      innermost first
        "wraps": [{"fields": {...}, "file": ..., "func": ..., "line": ..., "text": ...}, ...],
        "cause": "<foreign message>" | {"fields": ..., "file": ..., "func": ..., "line": ..., "text": ...}
    }

Example:
    >>> record = to_record(err)
    >>> record["wraps"][0]["text"]
    'load user 42: connection refused'
    >>> stack, wraps, cause = parse_record(record)
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from diagerrors.errors.exceptions import BaseError, WrapRecord, error_message
from diagerrors.errors.frames import Frame
from diagerrors.errors.unwind import Unwound, unwind
from diagerrors.utils.json_serializers import to_json_scalar


class SerializedCause(Exception):
    """Foreign cause restored from a record; only its message survives."""


class FrameRecord(BaseModel):
    """One stack frame."""

    file: str
    func: str
    line: int

    @classmethod
    def from_frame(cls, frame: Frame) -> "FrameRecord":
        return cls(file=frame.file, func=frame.function, line=frame.line)

    def to_frame(self) -> Frame:
        return Frame(file=self.file, function=self.func, line=self.line)


class LayerRecord(BaseModel):
    """A wrap record or a native root record."""

    fields: Dict[str, Any] = Field(default_factory=dict)
    file: str
    func: str
    line: int
    text: str

    @field_validator("fields", mode="before")
    @classmethod
    def coerce_field_values(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(k): to_json_scalar(v) for k, v in value.items()}
        return value

    @classmethod
    def from_parts(cls, fields: Mapping[str, Any], location: Frame, text: str) -> "LayerRecord":
        return cls(
            fields=dict(fields),
            file=location.file,
            func=location.function,
            line=location.line,
            text=text,
        )

    def location(self) -> Frame:
        return Frame(file=self.file, function=self.func, line=self.line)


class DiagnosticRecord(BaseModel):
    """Full serialized diagnostic: stack, wraps and cause."""

    stack: List[FrameRecord] = Field(default_factory=list)
    wraps: List[LayerRecord] = Field(default_factory=list)
    cause: Optional[Union[LayerRecord, str]] = None


def render(unwound: Unwound) -> DiagnosticRecord:
    """Build the serialized record for an unwound triple."""
    stack, wraps, cause = unwound

    rendered_cause: Optional[Union[LayerRecord, str]]
    if cause is None:
        rendered_cause = None
    elif isinstance(cause, BaseError):
        rendered_cause = LayerRecord.from_parts(cause.fields, cause.location, cause.text)
    else:
        rendered_cause = error_message(cause)

    return DiagnosticRecord(
        stack=[FrameRecord.from_frame(f) for f in stack],
        wraps=[LayerRecord.from_parts(w.fields, w.location, w.text) for w in wraps],
        cause=rendered_cause,
    )


def to_record(err: Optional[BaseException]) -> Dict[str, Any]:
    """Unwind ``err`` and return its record as a JSON-ready dict."""
    return render(unwind(err)).model_dump()


def to_json(err: Optional[BaseException]) -> str:
    """Unwind ``err`` and return its record as a JSON string."""
    return render(unwind(err)).model_dump_json()


def parse_record(data: Union[Mapping[str, Any], str, bytes]) -> Unwound:
    """
    Rebuild an unwound triple from a serialized record.

    A native root record comes back as a BaseError carrying the record's
    stack; a foreign cause comes back as a SerializedCause with the original
    message.
    """
    if isinstance(data, (str, bytes)):
        record = DiagnosticRecord.model_validate_json(data)
    else:
        record = DiagnosticRecord.model_validate(data)

    stack = tuple(f.to_frame() for f in record.stack)
    wraps = tuple(
        WrapRecord(fields=dict(w.fields), location=w.location(), text=w.text)
        for w in record.wraps
    )

    cause: Optional[BaseException]
    if record.cause is None:
        cause = None
    elif isinstance(record.cause, LayerRecord):
        cause = BaseError(
            record.cause.text, record.cause.fields, record.cause.location(), stack
        )
    else:
        cause = SerializedCause(record.cause)

    return Unwound(stack, wraps, cause)


__all__ = [
    "DiagnosticRecord",
    "FrameRecord",
    "LayerRecord",
    "SerializedCause",
    "parse_record",
    "render",
    "to_json",
    "to_record",
]
