"""Encryption descriptor carried by encrypted preview images.

The descriptor is owned by the attachment encryption layer; the preview codec
only validates that it parses and then carries it through untouched.  Unknown
keys are kept so that a descriptor survives a decode/encode cycle unchanged.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class _CarriedModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)


class JsonWebKey(_CarriedModel):
    """Symmetric key in JWK form (``A256CTR``)."""

    kty: str
    key_ops: List[str]
    alg: str
    k: str
    ext: bool


class EncryptedFile(_CarriedModel):
    """Content reference plus everything needed to decrypt it."""

    url: str = Field(min_length=1)
    key: JsonWebKey
    iv: str
    hashes: Dict[str, str]
    v: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
