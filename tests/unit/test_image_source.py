import pytest

from urlpreview.codec.image_source import decode_image_source, encode_image_source
from urlpreview.contracts.errors import FieldTypeError, MalformedNestedError
from urlpreview.contracts.url_preview import EncryptedImageSource, PlainImageSource


def test_decode_plain():
    source = decode_image_source({"og:image": "mxc://host/abc"})
    assert source == PlainImageSource(url="mxc://host/abc")


def test_decode_plain_alias():
    source = decode_image_source({"og:image:url": "mxc://host/abc"})
    assert source == PlainImageSource(url="mxc://host/abc")


def test_decode_none():
    assert decode_image_source({"og:image:width": 3}) is None


def test_encrypted_wins_over_plain(encrypted_wire):
    source = decode_image_source(
        {"og:image": "mxc://evil/plain", "matrix:image:encryption": encrypted_wire}
    )
    assert isinstance(source, EncryptedImageSource)
    assert source.url == "mxc://localhost/encryptedfile"


def test_legacy_encrypted_key(encrypted_wire):
    source = decode_image_source({"beeper:image:encryption": encrypted_wire})
    assert isinstance(source, EncryptedImageSource)


def test_legacy_encrypted_key_ignored_without_legacy(encrypted_wire):
    assert decode_image_source({"beeper:image:encryption": encrypted_wire}, legacy=False) is None


def test_malformed_descriptor(encrypted_wire):
    broken = dict(encrypted_wire)
    del broken["iv"]
    with pytest.raises(MalformedNestedError) as info:
        decode_image_source({"matrix:image:encryption": broken})
    assert info.value.key == "matrix:image:encryption"


def test_descriptor_must_be_object():
    with pytest.raises(FieldTypeError):
        decode_image_source({"matrix:image:encryption": "mxc://host/abc"})


def test_empty_plain_reference_rejected():
    with pytest.raises(FieldTypeError):
        decode_image_source({"og:image": ""})


def test_encode_plain_only_emits_plain_key():
    assert encode_image_source(PlainImageSource(url="mxc://host/abc")) == {"og:image": "mxc://host/abc"}


def test_encode_encrypted_only_emits_encrypted_key(encrypted_file, encrypted_wire):
    out = encode_image_source(EncryptedImageSource(file=encrypted_file))
    assert out == {"matrix:image:encryption": encrypted_wire}
    assert "og:image" not in out


def test_encode_with_predecessor_key(encrypted_file):
    out = encode_image_source(EncryptedImageSource(file=encrypted_file), "beeper:image:encryption")
    assert list(out) == ["beeper:image:encryption"]


def test_encode_none():
    assert encode_image_source(None) == {}


def test_empty_encrypted_reference_is_malformed(encrypted_wire):
    encrypted_wire["url"] = ""
    with pytest.raises(MalformedNestedError):
        decode_image_source({"matrix:image:encryption": encrypted_wire})


def test_stable_encrypted_key_wins_over_predecessor(encrypted_wire):
    older = {**encrypted_wire, "url": "mxc://localhost/older"}
    source = decode_image_source(
        {"beeper:image:encryption": older, "matrix:image:encryption": encrypted_wire}
    )
    assert source.url == "mxc://localhost/encryptedfile"
