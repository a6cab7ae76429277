"""Encode and decode the source of a preview image.

The encrypted reference is looked up first.  When it is present the plain
``og:image`` value is ignored, so a stale or injected plaintext URL cannot
replace the encrypted image.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from urlpreview.contracts.encrypted_file import EncryptedFile
from urlpreview.contracts.errors import FieldTypeError, MalformedNestedError
from urlpreview.contracts.url_preview import EncryptedImageSource, ImageSource, PlainImageSource
from urlpreview.telemetry.logger import get_logger

from .aliases import ENCRYPTED_IMAGE_KEY, PREVIEW_IMAGE_KEYS
from .scalars import parse_content_ref

log = get_logger(__name__)


def decode_image_source(obj: Mapping[str, Any], legacy: bool = True) -> Optional[ImageSource]:
    found = PREVIEW_IMAGE_KEYS.resolve(obj, "encrypted_image", legacy)
    if found is not None:
        key, value = found
        if not isinstance(value, Mapping):
            raise FieldTypeError("encrypted_image", key, "object", value)
        try:
            file = EncryptedFile.model_validate(value)
        except ValidationError as exc:
            raise MalformedNestedError("encrypted_image", key, str(exc)) from exc
        plain = PREVIEW_IMAGE_KEYS.resolve(obj, "image", legacy)
        if plain is not None:
            log.debug("encrypted image under %s wins over plain %s", key, plain[0])
        return EncryptedImageSource(file=file)

    found = PREVIEW_IMAGE_KEYS.resolve(obj, "image", legacy)
    if found is not None:
        key, value = found
        return PlainImageSource(url=parse_content_ref("image", key, value))
    return None


def encode_image_source(
    source: Optional[ImageSource], encryption_key: str = ENCRYPTED_IMAGE_KEY
) -> Dict[str, Any]:
    """Return the wire keys of exactly one variant (or none)."""

    if source is None:
        return {}
    if isinstance(source, EncryptedImageSource):
        return {encryption_key: source.file.to_wire()}
    return {PREVIEW_IMAGE_KEYS.canonical_key("image"): source.url}
