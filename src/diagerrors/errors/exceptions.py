"""
Diagnostic exception types.

Provides the records that make up a diagnostic error and the exception
classes that carry them:

- WrapRecord: one annotation layer applied while an error propagates
- BaseError: the root record of a natively constructed error
- StatusError: a BaseError that also carries an HTTP status
- DiagnosticError: stack + root (or foreign cause) + ordered wrap records
- HTTPError: a DiagnosticError exposing an HTTP status

Values are never modified once returned. Every derivation (adding a wrap,
merging fields) produces a new object that shares the immutable parts of the
original, so a single error can be wrapped from several call paths at once.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from diagerrors.errors.fields import freeze_fields, merge_fields
from diagerrors.errors.frames import Frame
from diagerrors.types import Fields

# Joins a layer's own text to the message of the error it wraps
MESSAGE_SEPARATOR = ": "

UNKNOWN_FRAME = Frame(file="<unknown>", function="<unknown>", line=0)


def error_message(err: BaseException) -> str:
    """Message of an arbitrary exception, falling back to its type name."""
    message = str(err)
    return message if message else type(err).__name__


def compose_message(text: str, inner: str) -> str:
    """Compose an ``outer: inner`` message; empty outer text yields ``inner``."""
    if not text:
        return inner
    return f"{text}{MESSAGE_SEPARATOR}{inner}"


def _evolve(obj: BaseException, **changes: Any) -> Any:
    # Copy an exception without calling its __init__ so subclasses with
    # different constructor signatures survive derivation.
    clone = obj.__class__.__new__(obj.__class__)
    clone.__dict__.update(obj.__dict__)
    clone.__dict__.update(changes)
    notes = clone.__dict__.get("__notes__")
    if isinstance(notes, list):
        clone.__dict__["__notes__"] = list(notes)
    Exception.__init__(clone, str(clone))
    return clone


def _restore(cls: type, state: Dict[str, Any]) -> Any:
    obj = cls.__new__(cls)
    obj.__dict__.update(state)
    Exception.__init__(obj, str(obj))
    return obj


@dataclass(frozen=True)
class WrapRecord:
    """
    One layer of contextual annotation.

    Attributes:
        fields: Key/value context supplied at this layer
        location: Call site of the wrap
        text: Fully composed message at this layer (own text + inner message)
    """

    fields: Fields = field(default_factory=dict)
    location: Frame = UNKNOWN_FRAME
    text: str = ""

    def with_fields(self, fields: Optional[Mapping[str, Any]]) -> "WrapRecord":
        return replace(self, fields=merge_fields(self.fields, fields))

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": dict(self.fields), **self.location.to_dict(), "text": self.text}


class BaseError(Exception):
    """
    Root record of an error constructed directly by this library.

    When a DiagnosticError has no foreign cause, its BaseError is what
    ``unwind`` reports as the cause, so it is itself an exception that can be
    logged, classified and serialized.

    Attributes:
        text: Human-readable message
        fields: Key/value context captured at construction
        location: Frame where the error was constructed
        stack: Call stack captured at construction, innermost first
    """

    def __init__(
        self,
        text: str,
        fields: Optional[Mapping[str, Any]] = None,
        location: Optional[Frame] = None,
        stack: Sequence[Frame] = (),
    ):
        self.text = text
        self.fields = freeze_fields(fields)
        self.stack: Tuple[Frame, ...] = tuple(stack)
        if location is None:
            location = self.stack[0] if self.stack else UNKNOWN_FRAME
        self.location = location
        super().__init__(text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r}, fields={self.fields!r})"

    def __reduce__(self):
        return (_restore, (self.__class__, self.__dict__.copy()))

    def with_fields(self, fields: Optional[Mapping[str, Any]]) -> "BaseError":
        return _evolve(self, fields=merge_fields(self.fields, fields))

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": dict(self.fields), **self.location.to_dict(), "text": self.text}


class StatusError(BaseError):
    """BaseError carrying an HTTP status code."""

    def __init__(
        self,
        text: str,
        status: int,
        fields: Optional[Mapping[str, Any]] = None,
        location: Optional[Frame] = None,
        stack: Sequence[Frame] = (),
    ):
        if not isinstance(status, int) or isinstance(status, bool):
            raise TypeError(f"status must be an int, got {type(status).__name__}")
        self.status = status
        super().__init__(text, fields, location, stack)

    def http_status(self) -> int:
        return self.status


class DiagnosticError(Exception):
    """
    Error enriched with a fixed call stack and ordered annotation layers.

    Exactly one of ``base`` (natively constructed) and ``foreign_cause``
    (first contact with an outside exception) is set.

    Attributes:
        stack: Frames captured where the error entered the diagnostic system
        base: Root record when natively constructed
        wraps: Annotation layers, earliest (innermost) first
        foreign_cause: Original outside exception, preserved unchanged
    """

    def __init__(
        self,
        stack: Sequence[Frame],
        base: Optional[BaseError] = None,
        wraps: Sequence[WrapRecord] = (),
        foreign_cause: Optional[BaseException] = None,
    ):
        if (base is None) == (foreign_cause is None):
            raise ValueError("exactly one of base and foreign_cause must be set")
        self.stack: Tuple[Frame, ...] = tuple(stack)
        self.base = base
        self.wraps: Tuple[WrapRecord, ...] = tuple(wraps)
        self.foreign_cause = foreign_cause
        super().__init__(self.message)

    @property
    def cause(self) -> BaseException:
        """Root cause: the foreign exception if any, else the base record."""
        if self.foreign_cause is not None:
            return self.foreign_cause
        return self.base

    @property
    def message(self) -> str:
        if self.wraps:
            return self.wraps[-1].text
        if self.base is not None:
            return self.base.text
        return error_message(self.foreign_cause)

    @property
    def text(self) -> str:
        return self.message

    @property
    def fields(self) -> Fields:
        """Fields of the most recent record (a copy)."""
        if self.wraps:
            return dict(self.wraps[-1].fields)
        if self.base is not None:
            return dict(self.base.fields)
        return {}

    @property
    def location(self) -> Frame:
        if self.wraps:
            return self.wraps[-1].location
        if self.base is not None:
            return self.base.location
        return self.stack[0] if self.stack else UNKNOWN_FRAME

    @property
    def is_foreign(self) -> bool:
        return self.foreign_cause is not None

    def with_fields(self, fields: Optional[Mapping[str, Any]]) -> "DiagnosticError":
        """
        Return a copy with ``fields`` merged into the most recent record.

        Adds no frame and no wrap record; later keys win.
        """
        if self.wraps:
            wraps = self.wraps[:-1] + (self.wraps[-1].with_fields(fields),)
            return _evolve(self, wraps=wraps)
        return _evolve(self, base=self.base.with_fields(fields))

    def append_wrap(self, record: WrapRecord) -> "DiagnosticError":
        """Return a copy with ``record`` appended as the outermost layer."""
        return _evolve(self, wraps=self.wraps + (record,))

    def replace_wrap(self, record: WrapRecord) -> "DiagnosticError":
        """Return a copy with the outermost layer replaced by ``record``."""
        if not self.wraps:
            raise ValueError("no wrap record to replace")
        return _evolve(self, wraps=self.wraps[:-1] + (record,))

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, "
            f"wraps={len(self.wraps)}, frames={len(self.stack)})"
        )

    def __reduce__(self):
        return (_restore, (self.__class__, self.__dict__.copy()))


class HTTPError(DiagnosticError):
    """DiagnosticError whose root carries an HTTP status."""

    @property
    def status(self) -> int:
        return self.http_status()

    def http_status(self) -> int:
        if isinstance(self.base, StatusError):
            return self.base.status
        # Only reachable if a foreign cause was attached to an HTTPError directly
        return 500


__all__ = [
    "MESSAGE_SEPARATOR",
    "BaseError",
    "StatusError",
    "WrapRecord",
    "DiagnosticError",
    "HTTPError",
    "compose_message",
    "error_message",
]
