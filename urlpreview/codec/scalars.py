"""Parsers for the scalar values found in preview entries.

Numbers are parsed strictly: ``"16588"``, ``16588.0`` and ``true`` are all
rejected, as are negative values and integers outside the JSON safe range.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from urlpreview.contracts.errors import FieldTypeError
from urlpreview.contracts.url_preview import UInt

_UINT = TypeAdapter(UInt)


def parse_uint(field: str, key: Optional[str], value: Any) -> int:
    try:
        return _UINT.validate_python(value)
    except ValidationError as exc:
        raise FieldTypeError(field, key, "unsigned integer", value) from exc


def parse_str(field: str, key: Optional[str], value: Any) -> str:
    if not isinstance(value, str):
        raise FieldTypeError(field, key, "string", value)
    return value


def parse_content_ref(field: str, key: Optional[str], value: Any) -> str:
    """Content references are opaque but must not be empty."""

    if not isinstance(value, str) or not value:
        raise FieldTypeError(field, key, "non-empty content reference", value)
    return value
