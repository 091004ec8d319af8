"""Tests for unwind."""

from diagerrors.errors.unwind import Unwound, unwind
from diagerrors.errors.wrap import new, wrap


class TestUnwind:

    def test_none(self):
        assert unwind(None) == Unwound((), (), None)

    def test_foreign_never_raised(self):
        err = ValueError("plain")
        stack, wraps, cause = unwind(err)
        assert stack == ()
        assert wraps == ()
        assert cause is err

    def test_foreign_raised_uses_traceback(self):
        def fail():
            raise ValueError("plain")

        try:
            fail()
        except ValueError as e:
            stack, wraps, cause = unwind(e)

        assert stack[0].function.endswith("fail")
        assert wraps == ()
        assert str(cause) == "plain"

    def test_reads_outermost_value(self):
        err = wrap(wrap(new({"a": 1}, "root"), {"b": 2}), {"c": 3})
        result = unwind(err)
        assert result.stack is err.stack
        assert result.wraps is err.wraps
        assert result.cause is err.base

    def test_is_a_named_triple(self):
        result = unwind(wrap(KeyError("k"), None))
        stack, wraps, cause = result
        assert result.stack == stack
        assert isinstance(cause, KeyError)
