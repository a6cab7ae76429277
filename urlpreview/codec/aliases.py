"""Key alias tables for URL preview entries.

Each logical field has one canonical wire key, which is the only key ever
written, and an ordered list of spellings accepted when reading.  Earlier
protocol revisions used different names for several fields (``og:image:url``,
``og:image:size``, the vendor prefixed ``beeper:image:encryption`` ...) and
entries produced by those revisions are still in circulation.

The tables are plain data so they can be inspected and tested without the
encoder.  Two tables that are flattened into the same object must not share a
key; :func:`ensure_disjoint` enforces that when the module is imported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from urlpreview.telemetry.logger import get_logger
from urlpreview.utils.validation import ensure

log = get_logger(__name__)


@dataclass(frozen=True)
class FieldKeys:
    """Wire spellings of one logical field."""

    field: str
    canonical: str
    aliases: Tuple[str, ...] = ()

    @property
    def accepted(self) -> Tuple[str, ...]:
        return (self.canonical,) + self.aliases


class AliasTable:
    """Ordered mapping of logical field name to :class:`FieldKeys`."""

    def __init__(self, name: str, fields: Iterable[FieldKeys]):
        self.name = name
        self._fields: Dict[str, FieldKeys] = {}
        owner: Dict[str, str] = {}
        for spec in fields:
            ensure(spec.field not in self._fields, f"{name}: duplicate field {spec.field!r}")
            for key in spec.accepted:
                ensure(
                    key not in owner,
                    f"{name}: key {key!r} claimed by both {owner.get(key)!r} and {spec.field!r}",
                )
                owner[key] = spec.field
            self._fields[spec.field] = spec
        self._owner = owner

    def keys(self) -> Tuple[str, ...]:
        """Every accepted wire key, canonical spellings included."""

        return tuple(self._owner)

    def canonical_key(self, field: str) -> str:
        return self._fields[field].canonical

    def accepted_keys(self, field: str, legacy: bool = True) -> Tuple[str, ...]:
        spec = self._fields[field]
        return spec.accepted if legacy else (spec.canonical,)

    def field_for_key(self, key: str) -> Optional[str]:
        return self._owner.get(key)

    def resolve(
        self, obj: Mapping[str, Any], field: str, legacy: bool = True
    ) -> Optional[Tuple[str, Any]]:
        """Return ``(key, value)`` for the first accepted key present in ``obj``.

        Keys are tried in precedence order.  ``None`` values count as absent.
        Lower precedence spellings that are also present are ignored.
        """

        found: Optional[Tuple[str, Any]] = None
        for key in self.accepted_keys(field, legacy):
            value = obj.get(key)
            if value is None:
                continue
            if found is None:
                found = (key, value)
            elif value != found[1]:
                log.debug("ignoring %s=%r, %s takes precedence", key, value, found[0])
        return found


def ensure_disjoint(*tables: AliasTable) -> None:
    """Raise ``ValueError`` if two tables accept the same wire key."""

    seen: Dict[str, str] = {}
    for table in tables:
        for key in table.keys():
            ensure(
                key not in seen,
                f"key {key!r} is used by both {seen.get(key)!r} and {table.name!r}",
            )
            seen[key] = table.name


URL_PREVIEW_KEYS = AliasTable(
    "url_preview",
    [
        FieldKeys("matched_url", "matrix:matched_url", ("matched_url",)),
        FieldKeys("canonical_url", "og:url"),
        FieldKeys("title", "og:title"),
        FieldKeys("description", "og:description"),
    ],
)

ENCRYPTED_IMAGE_KEY = "matrix:image:encryption"
LEGACY_ENCRYPTED_IMAGE_KEY = "beeper:image:encryption"

PREVIEW_IMAGE_KEYS = AliasTable(
    "preview_image",
    [
        FieldKeys("encrypted_image", ENCRYPTED_IMAGE_KEY, (LEGACY_ENCRYPTED_IMAGE_KEY,)),
        FieldKeys("image", "og:image", ("og:image:url",)),
        FieldKeys("size", "matrix:image:size", ("og:image:size",)),
        FieldKeys("width", "og:image:width"),
        FieldKeys("height", "og:image:height"),
        FieldKeys("mimetype", "og:image:type"),
    ],
)

ensure_disjoint(URL_PREVIEW_KEYS, PREVIEW_IMAGE_KEYS)


__all__ = [
    "FieldKeys",
    "AliasTable",
    "ensure_disjoint",
    "URL_PREVIEW_KEYS",
    "PREVIEW_IMAGE_KEYS",
    "ENCRYPTED_IMAGE_KEY",
    "LEGACY_ENCRYPTED_IMAGE_KEY",
]
