# Copyright (c) 2024-2026 nickdsmith. All Rights Reserved.
# SPDX-License-Identifier: PROPRIETARY
#
# This file is proprietary and confidential. Unauthorized copying of this file,
# via any medium is strictly prohibited.

"""Shared JSON serialization utilities for error fields and log records."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import UUID

JSON_SCALARS = (str, int, float, bool)


def _serialize_known_type(obj: Any) -> tuple[bool, Any]:
    """Try to serialize by known type. Returns (handled, result)."""
    if isinstance(obj, (datetime, date)):
        return True, obj.isoformat()
    if isinstance(obj, Decimal):
        return True, float(obj)
    if isinstance(obj, (Path, UUID)):
        return True, str(obj)
    if isinstance(obj, Enum):
        return True, obj.value
    if isinstance(obj, BaseException):
        return True, str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return True, asdict(obj)
    return False, None


def json_serializer(obj: Any) -> Any:
    """
    Type-safe JSON serializer used as ``json.dumps(default=...)``.

    Keeps proper types instead of converting everything to strings:
    - datetime/date → ISO 8601 string
    - Decimal → float
    - Path/UUID → string
    - Enum → value
    - exceptions → message
    - dataclasses → dict
    - Everything else → string (fallback)

    Args:
        obj: Object to serialize

    Returns:
        JSON-serializable representation
    """
    handled, result = _serialize_known_type(obj)
    if handled:
        return result
    return str(obj)


def to_json_scalar(value: Any) -> Any:
    """
    Coerce an error field value into a JSON scalar.

    Strings, numbers, booleans and None pass through; anything else goes
    through ``json_serializer`` and, if that still is not a scalar, ``str``.
    """
    if value is None or isinstance(value, JSON_SCALARS):
        return value
    result = json_serializer(value)
    if result is None or isinstance(result, JSON_SCALARS):
        return result
    return str(value)


__all__ = ["json_serializer", "to_json_scalar"]
