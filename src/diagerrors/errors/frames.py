"""
Call-stack capture.

Frames are captured by walking interpreter frame objects directly rather than
through ``traceback.extract_stack`` so that no source lines are read and the
function name can be module-qualified.
"""

import inspect
import sys
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass(frozen=True)
class Frame:
    """One call-site record in a captured stack."""

    file: str
    function: str
    line: int

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "func": self.function, "line": self.line}

    def __str__(self) -> str:
        return f"{self.function} ({self.file}:{self.line})"


def _frame_from(frame: FrameType, lineno: Optional[int] = None) -> Frame:
    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    function = f"{module}.{code.co_qualname}" if module else code.co_qualname
    return Frame(
        file=code.co_filename,
        function=function,
        line=lineno if lineno is not None else frame.f_lineno,
    )


def capture_stack(skip: int = 0, limit: Optional[int] = None) -> Tuple[Frame, ...]:
    """
    Capture the current call stack, innermost frame first.

    The first returned frame is the immediate caller of ``capture_stack``;
    ``skip`` drops that many further frames. Behaviour is the same inside an
    ``except`` block or a fault boundary: whatever is on the stack at the
    moment of capture is returned.

    Args:
        skip: Number of caller frames to skip beyond the immediate caller
        limit: Maximum number of frames to return (None = unlimited)

    Returns:
        Tuple of Frame, innermost first
    """
    if skip < 0:
        raise ValueError(f"skip must be >= 0, got {skip}")
    if limit is not None and limit <= 0:
        return ()

    try:
        frame: Optional[FrameType] = sys._getframe(skip + 1)
    except ValueError:
        return ()

    frames = []
    while frame is not None:
        frames.append(_frame_from(frame))
        if limit is not None and len(frames) >= limit:
            break
        frame = frame.f_back
    return tuple(frames)


def caller(skip: int = 0) -> Frame:
    """
    Return the frame that called the function invoking ``caller``.

    ``skip`` moves that many further frames outward.
    """
    # +1 for this function, +1 for the function asking who called it
    frames = capture_stack(skip + 2, limit=1)
    if not frames:
        return Frame(file="<unknown>", function="<unknown>", line=0)
    return frames[0]


def function_frame(func: Callable[..., Any]) -> Frame:
    """Frame pointing at the definition of ``func`` (decorators unwrapped)."""
    func = inspect.unwrap(func)
    code = func.__code__
    module = getattr(func, "__module__", None) or ""
    qualname = getattr(func, "__qualname__", code.co_qualname)
    return Frame(
        file=code.co_filename,
        function=f"{module}.{qualname}" if module else qualname,
        line=code.co_firstlineno,
    )


def frames_from_traceback(tb: Optional[TracebackType]) -> Tuple[Frame, ...]:
    """
    Convert a raised exception's traceback into frames, innermost first.

    Tracebacks link from the frame that caught the exception towards the frame
    that raised it, so the collected list is reversed.
    """
    frames = []
    while tb is not None:
        frames.append(_frame_from(tb.tb_frame, tb.tb_lineno))
        tb = tb.tb_next
    frames.reverse()
    return tuple(frames)


__all__ = ["Frame", "capture_stack", "caller", "frames_from_traceback", "function_frame"]
