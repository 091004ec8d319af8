from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from uuid import UUID

from diagerrors.utils.json_serializers import json_serializer, to_json_scalar


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Point:
    x: int
    y: int


# =========================================================================
# json_serializer
# =========================================================================


class TestJsonSerializer:

    def test_serializes_datetime_to_isoformat(self):
        dt = datetime(2025, 6, 15, 10, 30, 0)
        assert json_serializer(dt) == "2025-06-15T10:30:00"

    def test_serializes_date_to_isoformat(self):
        assert json_serializer(date(2025, 12, 25)) == "2025-12-25"

    def test_serializes_decimal_to_float(self):
        result = json_serializer(Decimal("3.14"))
        assert result == 3.14
        assert isinstance(result, float)

    def test_serializes_path_to_string(self):
        assert json_serializer(Path("/usr/local/bin")) == "/usr/local/bin"

    def test_serializes_uuid_to_string(self):
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert json_serializer(value) == "12345678-1234-5678-1234-567812345678"

    def test_serializes_enum_value(self):
        assert json_serializer(Color.RED) == "red"

    def test_serializes_exception_message(self):
        assert json_serializer(ValueError("bad input")) == "bad input"

    def test_serializes_dataclass_to_dict(self):
        assert json_serializer(Point(1, 2)) == {"x": 1, "y": 2}

    def test_falls_back_to_str(self):
        assert json_serializer({1, 2}) in ("{1, 2}", "{2, 1}")


# =========================================================================
# to_json_scalar
# =========================================================================


class TestToJsonScalar:

    def test_scalars_pass_through(self):
        for value in ("s", 1, 1.5, True, None):
            assert to_json_scalar(value) == value

    def test_known_types_converted(self):
        assert to_json_scalar(Decimal("2")) == 2.0
        assert to_json_scalar(Color.BLUE) == "blue"

    def test_non_scalar_result_becomes_string(self):
        assert to_json_scalar(Point(1, 2)) == "Point(x=1, y=2)"
        assert to_json_scalar([1, 2]) == "[1, 2]"
