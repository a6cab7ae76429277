"""Helpers for clients consuming decoded URL previews."""

import re
from typing import Dict, List, Sequence

from urlpreview.contracts.message import TextMessageContent
from urlpreview.contracts.url_preview import UrlPreview

URL_RE = re.compile(r"https?://\S+", re.I)


def extract_urls(text: str) -> List[str]:
    return re.findall(URL_RE, text or "")


def _unique_preserve(seq: Sequence[str]) -> List[str]:
    seen = set(); out = []
    for x in seq:
        if x not in seen:
            out.append(x); seen.add(x)
    return out


def previews_by_url(previews: Sequence[UrlPreview]) -> Dict[str, UrlPreview]:
    """Map each matched URL to its first preview entry."""

    out: Dict[str, UrlPreview] = {}
    for p in previews:
        out.setdefault(p.matched_url, p)
    return out


def order_by_body(body: str, previews: Sequence[UrlPreview]) -> List[UrlPreview]:
    """Sort ``previews`` by where their matched URL first occurs in ``body``.

    Entries whose URL does not occur keep their relative order at the end.
    """

    def position(item):
        index, p = item
        at = (body or "").find(p.matched_url)
        return (at < 0, at, index)

    return [p for _, p in sorted(enumerate(previews), key=position)]


def urls_needing_fallback(content: TextMessageContent) -> List[str]:
    """URLs the client should ask its homeserver to preview.

    Without an ``m.url_previews`` key nothing was computed by the sender, so
    every URL in the body qualifies.  Otherwise only entries that carry no
    preview data of their own do.
    """

    if content.url_previews is None:
        return _unique_preserve(extract_urls(content.text))
    return _unique_preserve(
        [p.matched_url for p in content.url_previews if p.should_ask_homeserver()]
    )
