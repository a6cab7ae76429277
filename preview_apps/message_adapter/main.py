"""HTTP entry point for the message adapter.

The endpoints delegate to :class:`preview_apps.message_adapter.MessageAdapter`.
Malformed preview entries are reported as ``422`` with the offending field.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from preview_apps.message_adapter import MessageAdapter
from urlpreview.contracts.errors import PreviewDecodeError
from urlpreview.contracts.url_preview import UrlPreview


adapter = MessageAdapter()
app = FastAPI()


class EncodeRequest(BaseModel):
    previews: List[UrlPreview] = Field(default_factory=list)


@app.post("/decode")
async def decode(payload: Dict[str, Any]):
    """Return the normalised payload and the URLs needing a homeserver preview."""

    try:
        return adapter.normalize(payload)
    except PreviewDecodeError as exc:
        raise HTTPException(
            status_code=422,
            detail={"field": exc.field, "key": exc.key, "error": str(exc)},
        ) from exc


@app.post("/encode")
async def encode(req: EncodeRequest):
    """Return the wire form of the supplied previews."""

    return {"m.url_previews": adapter.encode(req.previews)}
