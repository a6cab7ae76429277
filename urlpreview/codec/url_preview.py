"""Wire codec for :class:`~urlpreview.contracts.url_preview.UrlPreview`.

Encoding writes the page keys and the image keys into one flat object using
the canonical spellings from :mod:`.aliases`; absent values are omitted and an
image without a source contributes no keys.  Decoding reads the page keys
first, then the image keys from the same object, accepting every alias and
ignoring keys it does not know.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from urlpreview.config.codec_loader import CodecConfig, default_config
from urlpreview.contracts.errors import FieldTypeError, MissingFieldError
from urlpreview.contracts.url_preview import PreviewImage, UrlPreview, is_empty_image
from urlpreview.telemetry.logger import get_logger

from .aliases import PREVIEW_IMAGE_KEYS, URL_PREVIEW_KEYS
from .flatten import merge_flat, split_flat
from .image_source import decode_image_source, encode_image_source
from .scalars import parse_str, parse_uint

log = get_logger(__name__)

_TEXT_FIELDS = ("canonical_url", "title", "description")
_UINT_FIELDS = ("size", "width", "height")


def _cfg(config: Optional[CodecConfig]) -> CodecConfig:
    return config if config is not None else default_config()


# ---------------------------------------------------------------------------
# Preview image
# ---------------------------------------------------------------------------

def encode_image(image: PreviewImage, config: Optional[CodecConfig] = None) -> Dict[str, Any]:
    """Return the image keys, or an empty mapping when there is no source."""

    cfg = _cfg(config)
    if image.is_empty():
        return {}
    out = encode_image_source(image.source, cfg.encryption_key)
    for name in _UINT_FIELDS + ("mimetype",):
        value = getattr(image, name)
        if value is not None:
            out[PREVIEW_IMAGE_KEYS.canonical_key(name)] = value
    return out


def decode_image(obj: Mapping[str, Any], config: Optional[CodecConfig] = None) -> PreviewImage:
    cfg = _cfg(config)
    legacy = cfg.accept_legacy_keys
    values: Dict[str, Any] = {}
    for name in _UINT_FIELDS:
        found = PREVIEW_IMAGE_KEYS.resolve(obj, name, legacy)
        if found is not None:
            values[name] = parse_uint(name, found[0], found[1])
    found = PREVIEW_IMAGE_KEYS.resolve(obj, "mimetype", legacy)
    if found is not None:
        values["mimetype"] = parse_str("mimetype", found[0], found[1])

    source = decode_image_source(obj, legacy)
    if source is None:
        if values:
            log.debug("dropping image metadata without an image source: %s", sorted(values))
        return PreviewImage()
    return PreviewImage(source=source, **values)


# ---------------------------------------------------------------------------
# Url preview
# ---------------------------------------------------------------------------

def encode_preview(preview: UrlPreview, config: Optional[CodecConfig] = None) -> Dict[str, Any]:
    """Encode ``preview`` as one flat JSON object."""

    own = {
        URL_PREVIEW_KEYS.canonical_key(name): getattr(preview, name)
        for name in ("matched_url",) + _TEXT_FIELDS
    }
    return merge_flat(
        own,
        encode_image(preview.image, config),
        skip_inner=lambda: is_empty_image(preview.image),
    )


def decode_preview(obj: Any, config: Optional[CodecConfig] = None) -> UrlPreview:
    """Decode one flat preview entry.

    Raises
    ------
    MissingFieldError
        ``matched_url`` is absent under every accepted key.
    FieldTypeError
        A field is present with a value of the wrong type.
    MalformedNestedError
        The encryption descriptor of an encrypted image is invalid.
    """

    if not isinstance(obj, Mapping):
        raise FieldTypeError("entry", None, "object", obj)
    cfg = _cfg(config)
    legacy = cfg.accept_legacy_keys
    own, inner, _unknown = split_flat(obj, URL_PREVIEW_KEYS.keys(), PREVIEW_IMAGE_KEYS.keys())

    found = URL_PREVIEW_KEYS.resolve(own, "matched_url", legacy)
    if found is None:
        raise MissingFieldError("matched_url", URL_PREVIEW_KEYS.accepted_keys("matched_url", legacy))
    values: Dict[str, Any] = {"matched_url": parse_str("matched_url", *found)}
    for name in _TEXT_FIELDS:
        found = URL_PREVIEW_KEYS.resolve(own, name, legacy)
        if found is not None:
            values[name] = parse_str(name, *found)

    return UrlPreview(image=decode_image(inner, cfg), **values)


def encode_previews(previews: Iterable[UrlPreview], config: Optional[CodecConfig] = None) -> List[Dict[str, Any]]:
    return [encode_preview(p, config) for p in previews]


def decode_previews(entries: Iterable[Any], config: Optional[CodecConfig] = None) -> List[UrlPreview]:
    """Decode every entry; the first malformed one raises."""

    return [decode_preview(e, config) for e in entries]


__all__ = [
    "encode_image",
    "decode_image",
    "encode_preview",
    "decode_preview",
    "encode_previews",
    "decode_previews",
]
