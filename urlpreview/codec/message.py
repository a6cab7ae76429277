"""Read and write the ``m.url_previews`` array of a message payload."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from urlpreview.config.codec_loader import CodecConfig, default_config
from urlpreview.contracts.errors import FieldTypeError, PreviewDecodeError
from urlpreview.contracts.message import URL_PREVIEWS_KEY, TextMessageContent
from urlpreview.contracts.url_preview import UrlPreview
from urlpreview.telemetry.logger import get_logger

from .scalars import parse_str
from .url_preview import decode_preview, encode_previews

log = get_logger(__name__)


def _decode_entries(value: Any, cfg: CodecConfig) -> List[UrlPreview]:
    if not isinstance(value, list):
        raise FieldTypeError("url_previews", URL_PREVIEWS_KEY, "array", value)
    previews: List[UrlPreview] = []
    for index, entry in enumerate(value):
        try:
            previews.append(decode_preview(entry, cfg))
        except PreviewDecodeError as exc:
            if cfg.invalid_entry_policy != "drop":
                raise
            log.warning("dropping url preview #%d: %s", index, exc)
    return previews


def decode_message(payload: Any, config: Optional[CodecConfig] = None) -> TextMessageContent:
    """Decode a text message payload together with its URL previews."""

    cfg = config if config is not None else default_config()
    if not isinstance(payload, Mapping):
        raise FieldTypeError("content", None, "object", payload)
    extra = {
        k: v for k, v in payload.items() if k not in ("msgtype", "body", URL_PREVIEWS_KEY)
    }
    fields: Dict[str, Any] = {"extra": extra}
    for name in ("msgtype", "body"):
        if payload.get(name) is not None:
            fields[name] = parse_str(name, name, payload[name])
    raw_previews = payload.get(URL_PREVIEWS_KEY)
    if raw_previews is not None:
        fields["url_previews"] = _decode_entries(raw_previews, cfg)
    return TextMessageContent(**fields)


def encode_message(content: TextMessageContent, config: Optional[CodecConfig] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(content.extra)
    for name in ("msgtype", "body"):
        value = getattr(content, name)
        if value is not None:
            out[name] = value
    if content.url_previews is not None:
        out[URL_PREVIEWS_KEY] = encode_previews(content.url_previews, config)
    return out
