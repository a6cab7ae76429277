"""Flatten nested key groups into a single JSON object and back.

A preview entry stores the image keys next to the page keys instead of in a
sub-object.  :func:`merge_flat` builds such an object from the two groups and
:func:`split_flat` partitions one back.  Whether the nested group is written
at all is decided by the caller through ``skip_inner``.
"""

from __future__ import annotations

from typing import Any, Callable, Collection, Dict, Mapping, Optional, Tuple

Pairs = Mapping[str, Any]


def _present(pairs: Pairs) -> Dict[str, Any]:
    return {k: v for k, v in pairs.items() if v is not None}


def merge_flat(
    outer: Pairs,
    inner: Pairs,
    skip_inner: Optional[Callable[[], bool]] = None,
) -> Dict[str, Any]:
    """Return the union of ``outer`` and ``inner`` with ``None`` values dropped.

    ``inner`` contributes nothing when ``skip_inner()`` is true.  The groups
    must not share a key.
    """

    merged = _present(outer)
    if skip_inner is not None and skip_inner():
        return merged
    for key, value in _present(inner).items():
        if key in merged:
            raise ValueError(f"flattened key collision on {key!r}")
        merged[key] = value
    return merged


def split_flat(
    obj: Mapping[str, Any],
    outer_keys: Collection[str],
    inner_keys: Collection[str],
) -> Tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any]]:
    """Partition ``obj`` into ``(outer, inner, unknown)`` by key membership."""

    outer: Dict[str, Any] = {}
    inner: Dict[str, Any] = {}
    unknown: Dict[str, Any] = {}
    for key, value in obj.items():
        if key in outer_keys:
            outer[key] = value
        elif key in inner_keys:
            inner[key] = value
        else:
            unknown[key] = value
    return outer, inner, unknown
