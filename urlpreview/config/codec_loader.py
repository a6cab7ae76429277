from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from urlpreview.codec.aliases import ENCRYPTED_IMAGE_KEY, LEGACY_ENCRYPTED_IMAGE_KEY
from urlpreview.utils.validation import ensure

from .yaml_loader import load_yaml

DEFAULT_CONFIG_PATH = "config/url_previews.yaml"
INVALID_ENTRY_POLICIES = ("fail", "drop")


@dataclass(frozen=True)
class CodecConfig:
    """Typed view over ``url_previews.yaml``.

    The raw mapping is retained so that keys not modelled here can still be
    looked up by callers embedding the codec.
    """

    encryption_key: str = ENCRYPTED_IMAGE_KEY
    invalid_entry_policy: str = "fail"
    accept_legacy_keys: bool = True
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        ensure(
            self.encryption_key in (ENCRYPTED_IMAGE_KEY, LEGACY_ENCRYPTED_IMAGE_KEY),
            f"unsupported encryption key: {self.encryption_key!r}",
        )
        ensure(
            self.invalid_entry_policy in INVALID_ENTRY_POLICIES,
            f"invalid_entry_policy must be one of {INVALID_ENTRY_POLICIES}, "
            f"got {self.invalid_entry_policy!r}",
        )
        ensure(
            isinstance(self.accept_legacy_keys, bool),
            "accept_legacy_keys must be a boolean",
        )


def default_config() -> CodecConfig:
    return CodecConfig()


def load_codec_config(path: str = DEFAULT_CONFIG_PATH) -> CodecConfig:
    """Load ``url_previews.yaml`` and return a :class:`CodecConfig`.

    Parameters
    ----------
    path:
        File system path to the YAML configuration file.  A missing file
        yields the defaults.
    """

    if not Path(path).exists():
        return default_config()
    raw = load_yaml(path)
    section = raw.get("url_previews", {}) or {}
    encode = section.get("encode", {}) or {}
    decode = section.get("decode", {}) or {}
    return CodecConfig(
        encryption_key=encode.get("encryption_key", ENCRYPTED_IMAGE_KEY),
        invalid_entry_policy=decode.get("invalid_entry_policy", "fail"),
        accept_legacy_keys=decode.get("accept_legacy_keys", True),
        raw=raw,
    )
