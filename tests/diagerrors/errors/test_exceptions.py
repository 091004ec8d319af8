"""
Tests for diagnostic exception types and records.
"""

import pickle

import pytest

from diagerrors.errors.exceptions import (
    MESSAGE_SEPARATOR,
    BaseError,
    DiagnosticError,
    HTTPError,
    StatusError,
    WrapRecord,
    compose_message,
    error_message,
)
from diagerrors.errors.frames import Frame
from diagerrors.errors.wrap import new, not_found, wrap

LOC = Frame(file="svc.py", function="svc.handler", line=10)


class TestBaseError:
    """Test native root record."""

    def test_basic_error(self):
        err = BaseError("disk full", {"path": "/tmp"}, LOC, (LOC,))
        assert str(err) == "disk full"
        assert err.fields == {"path": "/tmp"}
        assert err.location == LOC
        assert err.stack == (LOC,)

    def test_location_defaults_to_first_frame(self):
        err = BaseError("x", stack=(LOC,))
        assert err.location == LOC

    def test_to_dict_shape(self):
        err = BaseError("x", {"a": 1}, LOC)
        assert err.to_dict() == {
            "fields": {"a": 1},
            "file": "svc.py",
            "func": "svc.handler",
            "line": 10,
            "text": "x",
        }

    def test_with_fields_returns_new_value(self):
        err = BaseError("x", {"a": 1}, LOC)
        merged = err.with_fields({"b": 2})
        assert merged is not err
        assert err.fields == {"a": 1}
        assert merged.fields == {"a": 1, "b": 2}
        assert str(merged) == "x"

    def test_is_an_exception(self):
        with pytest.raises(BaseError, match="boom"):
            raise BaseError("boom")


class TestStatusError:

    def test_exposes_status(self):
        err = StatusError("gone", 410)
        assert err.status == 410
        assert err.http_status() == 410

    def test_with_fields_keeps_status(self):
        err = StatusError("gone", 410).with_fields({"id": 1})
        assert isinstance(err, StatusError)
        assert err.http_status() == 410

    def test_rejects_bool_status(self):
        with pytest.raises(TypeError):
            StatusError("x", True)


class TestWrapRecord:

    def test_to_dict_shape(self):
        record = WrapRecord({"a": 1}, LOC, "ctx: inner")
        assert record.to_dict() == {
            "fields": {"a": 1},
            "file": "svc.py",
            "func": "svc.handler",
            "line": 10,
            "text": "ctx: inner",
        }

    def test_with_fields_merges(self):
        record = WrapRecord({"a": 1}, LOC, "t").with_fields({"a": 3, "b": 2})
        assert record.fields == {"a": 3, "b": 2}


class TestDiagnosticError:

    def test_requires_exactly_one_root(self):
        with pytest.raises(ValueError):
            DiagnosticError((LOC,))
        with pytest.raises(ValueError):
            DiagnosticError((LOC,), base=BaseError("x"), foreign_cause=ValueError("y"))

    def test_latest_record_accessors(self):
        err = wrap(new({"a": 1}, "base"), {"b": 2})
        assert err.fields == {"b": 2}
        assert err.text == "base"
        assert err.location == err.wraps[-1].location

    def test_fields_accessor_returns_copy(self):
        err = new({"a": 1}, "x")
        err.fields["a"] = 99
        assert err.fields == {"a": 1}

    def test_args_match_message(self):
        err = wrap(ValueError("inner"), None)
        assert err.args == ("inner",)

    def test_repr_mentions_counts(self):
        err = wrap(ValueError("inner"), None)
        assert "wraps=1" in repr(err)

    def test_pickle_round_trip(self):
        err = wrap(not_found({"id": 7}, "missing"), {"layer": 1})
        restored = pickle.loads(pickle.dumps(err))
        assert isinstance(restored, HTTPError)
        assert str(restored) == str(err)
        assert restored.wraps == err.wraps
        assert restored.stack == err.stack
        assert restored.http_status() == 404
        assert restored.base.fields == {"id": 7}

    def test_notes_not_shared_with_derived_values(self):
        err = new(None, "x")
        err.add_note("first")
        derived = err.with_fields({"k": "v"})
        derived.add_note("second")

        assert err.__notes__ == ["first"]
        assert derived.__notes__ == ["first", "second"]

    def test_replace_wrap_swaps_outermost_record(self):
        err = wrap(wrap(ValueError("inner"), {"a": 1}), {"b": 2})
        record = WrapRecord({"c": 3}, LOC, "replaced")
        replaced = err.replace_wrap(record)

        assert replaced.wraps[0] == err.wraps[0]
        assert replaced.wraps[-1] == record
        assert len(replaced.wraps) == 2
        assert replaced.stack is err.stack
        assert err.wraps[-1].fields == {"b": 2}

    def test_replace_wrap_requires_a_wrap(self):
        with pytest.raises(ValueError):
            new(None, "x").replace_wrap(WrapRecord())


class TestMessageHelpers:

    def test_separator(self):
        assert MESSAGE_SEPARATOR == ": "
        assert compose_message("outer", "inner") == "outer: inner"

    def test_empty_outer_text(self):
        assert compose_message("", "inner") == "inner"

    def test_error_message_falls_back_to_type(self):
        assert error_message(ValueError()) == "ValueError"
        assert error_message(ValueError("x")) == "x"
