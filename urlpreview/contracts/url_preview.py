"""URL preview records attached to chat messages.

A message may carry one :class:`UrlPreview` per URL found in its body.  The
preview describes the page (OpenGraph title, description, canonical URL) and
optionally an image which is stored either as a plain content reference or as
an encrypted one.  Both image forms are modelled as separate variants of
:data:`ImageSource` so a preview can never hold the two at once.

The wire representation lives in :mod:`urlpreview.codec`; the records here
only hold already-validated values.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator

from .encrypted_file import EncryptedFile

# Largest integer that survives a round trip through every JSON implementation.
MAX_UINT = 2**53 - 1

UInt = Annotated[int, Field(ge=0, le=MAX_UINT, strict=True)]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class PlainImageSource(_FrozenModel):
    """Image stored unencrypted at ``url``."""

    kind: Literal["plain"] = "plain"
    url: str = Field(min_length=1)


class EncryptedImageSource(_FrozenModel):
    """Image stored encrypted; ``file`` holds the reference and the key material."""

    kind: Literal["encrypted"] = "encrypted"
    file: EncryptedFile

    @property
    def url(self) -> str:
        return self.file.url


def _source_kind(value: Any) -> Optional[str]:
    """Tag of an image source; untagged mappings are told apart by shape."""

    if not isinstance(value, dict):
        return getattr(value, "kind", None)
    if value.get("kind") is not None:
        return value["kind"]
    if "file" in value:
        return "encrypted"
    if "url" in value:
        return "plain"
    return None


ImageSource = Annotated[
    Union[
        Annotated[PlainImageSource, Tag("plain")],
        Annotated[EncryptedImageSource, Tag("encrypted")],
    ],
    Discriminator(_source_kind),
]


_METADATA_FIELDS = ("size", "width", "height", "mimetype")


class PreviewImage(_FrozenModel):
    """Image metadata modelled after the OpenGraph image properties.

    ``size``, ``width``, ``height`` and ``mimetype`` describe the image named
    by ``source``.  Without a source there is nothing to describe, so they are
    cleared on construction.
    """

    source: Optional[ImageSource] = None
    size: Optional[UInt] = None
    width: Optional[UInt] = None
    height: Optional[UInt] = None
    mimetype: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_metadata_without_source(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("source") is None:
            return {k: v for k, v in data.items() if k not in _METADATA_FIELDS}
        return data

    @classmethod
    def plain(cls, url: str, **metadata) -> "PreviewImage":
        return cls(source=PlainImageSource(url=url), **metadata)

    @classmethod
    def encrypted(cls, file: EncryptedFile, **metadata) -> "PreviewImage":
        return cls(source=EncryptedImageSource(file=file), **metadata)

    def has_image(self) -> bool:
        return self.source is not None

    def is_empty(self) -> bool:
        return self.source is None

    @property
    def is_encrypted(self) -> bool:
        return isinstance(self.source, EncryptedImageSource)


def is_empty_image(image: Optional[PreviewImage]) -> bool:
    """Return ``True`` when ``image`` contributes nothing to an encoded preview."""

    return image is None or image.is_empty()


class UrlPreview(_FrozenModel):
    """Preview information for one URL matched in a message body."""

    matched_url: str
    canonical_url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: PreviewImage = Field(default_factory=PreviewImage)

    @classmethod
    def for_matched_url(cls, matched_url: str) -> "UrlPreview":
        """Minimal entry: the receiving client has to fetch the preview itself."""

        return cls(matched_url=matched_url)

    def contains_preview(self) -> bool:
        """Whether the entry carries any preview data of its own."""

        return (
            self.canonical_url is not None
            or self.title is not None
            or self.description is not None
            or self.image.has_image()
        )

    def should_ask_homeserver(self) -> bool:
        """Whether the client should ask its homeserver to preview ``matched_url``."""

        return not self.contains_preview()


__all__ = [
    "MAX_UINT",
    "PlainImageSource",
    "EncryptedImageSource",
    "ImageSource",
    "PreviewImage",
    "UrlPreview",
    "is_empty_image",
]
