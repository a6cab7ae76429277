"""Decode errors raised for malformed URL preview entries.

Every error is a :class:`ValueError` so callers that already guard payload
parsing with ``except ValueError`` keep working.  The logical field name and,
when known, the wire key that triggered the failure are kept on the instance.
"""

from __future__ import annotations

from typing import Optional


class PreviewDecodeError(ValueError):
    """Base class for structural decode failures of a preview entry."""

    def __init__(self, field: str, message: str, key: Optional[str] = None):
        self.field = field
        self.key = key
        super().__init__(message)


class MissingFieldError(PreviewDecodeError):
    """A required field is absent under every accepted key."""

    def __init__(self, field: str, accepted_keys=()):
        self.accepted_keys = tuple(accepted_keys)
        spelled = ", ".join(self.accepted_keys) or field
        super().__init__(field, f"required field missing: {field} (accepted keys: {spelled})")


class FieldTypeError(PreviewDecodeError):
    """A field is present but its value does not fit the declared type."""

    def __init__(self, field: str, key: Optional[str], expected: str, value: object = None):
        self.expected = expected
        got = type(value).__name__
        where = f"{field} ({key})" if key else field
        super().__init__(field, f"field type mismatch: {where} expected {expected}, got {got}", key=key)


class MalformedNestedError(PreviewDecodeError):
    """A nested structure (the encryption descriptor) failed its own validation."""

    def __init__(self, field: str, key: Optional[str], detail: str):
        super().__init__(field, f"malformed nested structure under {key or field}: {detail}", key=key)


__all__ = [
    "PreviewDecodeError",
    "MissingFieldError",
    "FieldTypeError",
    "MalformedNestedError",
]
