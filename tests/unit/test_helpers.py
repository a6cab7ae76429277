from urlpreview.contracts.message import TextMessageContent
from urlpreview.contracts.url_preview import PreviewImage, UrlPreview
from urlpreview.utils.helpers import (
    extract_urls,
    order_by_body,
    previews_by_url,
    urls_needing_fallback,
)


def test_extract_urls():
    assert extract_urls("see https://a.example and http://b.example/x") == [
        "https://a.example",
        "http://b.example/x",
    ]


def test_order_by_body():
    a = UrlPreview.for_matched_url("https://a.example")
    b = UrlPreview.for_matched_url("matrix.org/support")
    c = UrlPreview.for_matched_url("https://missing.example")
    body = "first matrix.org/support then https://a.example"
    assert order_by_body(body, [c, a, b]) == [b, a, c]


def test_previews_by_url_keeps_first():
    first = UrlPreview(matched_url="u", title="one")
    second = UrlPreview(matched_url="u", title="two")
    assert previews_by_url([first, second]) == {"u": first}


def test_fallback_without_previews_key():
    content = TextMessageContent(body="https://a.example https://a.example https://b.example")
    assert urls_needing_fallback(content) == ["https://a.example", "https://b.example"]


def test_fallback_with_previews():
    content = TextMessageContent(
        body="https://a.example https://b.example",
        url_previews=[
            UrlPreview.for_matched_url("https://a.example"),
            UrlPreview(matched_url="https://b.example", image=PreviewImage.plain("mxc://h/i")),
        ],
    )
    assert urls_needing_fallback(content) == ["https://a.example"]


def test_fallback_with_empty_previews():
    content = TextMessageContent(body="https://a.example", url_previews=[])
    assert urls_needing_fallback(content) == []


def test_fallback_for_extensible_message_without_previews():
    content = TextMessageContent(extra={"m.text": [{"body": "see https://matrix.org/support"}]})
    assert urls_needing_fallback(content) == ["https://matrix.org/support"]
