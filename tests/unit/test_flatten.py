import pytest

from urlpreview.codec.flatten import merge_flat, split_flat
from urlpreview.contracts.url_preview import PreviewImage, is_empty_image


def test_merge_drops_none_values():
    merged = merge_flat({"a": 1, "b": None}, {"c": None, "d": 4})
    assert merged == {"a": 1, "d": 4}


def test_merge_skips_vacuous_inner():
    merged = merge_flat({"a": 1}, {"og:image:width": 5}, skip_inner=lambda: True)
    assert merged == {"a": 1}


def test_merge_rejects_collision():
    with pytest.raises(ValueError):
        merge_flat({"a": 1}, {"a": 2})


def test_split_partitions_keys():
    outer, inner, unknown = split_flat(
        {"og:title": "t", "og:image": "mxc://h/i", "x:future": True},
        outer_keys={"og:title"},
        inner_keys={"og:image"},
    )
    assert outer == {"og:title": "t"}
    assert inner == {"og:image": "mxc://h/i"}
    assert unknown == {"x:future": True}


def test_empty_image_predicate():
    assert is_empty_image(None)
    assert is_empty_image(PreviewImage())
    assert is_empty_image(PreviewImage(width=10, mimetype="image/png"))
    assert not is_empty_image(PreviewImage.plain("mxc://h/i"))
