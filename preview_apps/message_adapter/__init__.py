"""Message adapter for URL previews.

:class:`MessageAdapter` is the facade the HTTP layer talks to.  It decodes an
incoming message payload with the configured codec settings and reports which
URLs still have to be previewed by the homeserver.  No URL is fetched here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from urlpreview.codec.message import decode_message, encode_message
from urlpreview.codec.url_preview import encode_previews
from urlpreview.config.codec_loader import DEFAULT_CONFIG_PATH, CodecConfig, load_codec_config
from urlpreview.contracts.url_preview import UrlPreview
from urlpreview.telemetry.logger import get_logger
from urlpreview.utils.helpers import order_by_body, urls_needing_fallback

log = get_logger(__name__)


@dataclass
class MessageAdapter:
    """Normalise message payloads carrying ``m.url_previews``.

    Parameters
    ----------
    config: optional :class:`CodecConfig`.  When omitted it is loaded from
        ``config_path``; a missing file yields the defaults.
    """

    config: Optional[CodecConfig] = field(default=None)
    config_path: str = DEFAULT_CONFIG_PATH

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = load_codec_config(self.config_path)

    def normalize(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Decode ``payload`` and return it re-encoded with canonical keys.

        Preview entries are reordered to follow the body.  The result also
        lists the URLs that need a homeserver preview.
        """

        content = decode_message(payload, self.config)
        if content.url_previews:
            content = content.model_copy(
                update={"url_previews": order_by_body(content.text, content.url_previews)}
            )
        fallback = urls_needing_fallback(content)
        log.debug("normalised message with %d fallback url(s)", len(fallback))
        return {"content": encode_message(content, self.config), "ask_homeserver": fallback}

    def encode(self, previews: List[UrlPreview]) -> List[Dict[str, Any]]:
        return encode_previews(previews, self.config)


__all__ = ["MessageAdapter"]
