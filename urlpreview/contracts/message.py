"""Message content carrying URL previews."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .url_preview import UrlPreview

URL_PREVIEWS_KEY = "m.url_previews"
TEXT_BLOCKS_KEY = "m.text"


class TextMessageContent(BaseModel):
    """The parts of a text message the preview codec needs.

    ``url_previews`` is ``None`` when the payload has no ``m.url_previews``
    key and an empty list when the key holds an empty array.  ``msgtype`` and
    ``body`` are ``None`` when the payload lacks them, as extensible messages
    do.  Other payload keys are kept in ``extra`` so they are written back
    unchanged.
    """

    model_config = ConfigDict(frozen=True)

    msgtype: Optional[str] = None
    body: Optional[str] = None
    url_previews: Optional[List[UrlPreview]] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        """Plain text of the message: ``body``, else the first ``m.text`` block."""

        if self.body is not None:
            return self.body
        blocks = self.extra.get(TEXT_BLOCKS_KEY)
        if isinstance(blocks, list):
            for block in blocks:
                if isinstance(block, dict) and isinstance(block.get("body"), str):
                    return block["body"]
        return ""
