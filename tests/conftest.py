import pytest

from urlpreview.contracts.encrypted_file import EncryptedFile


def encrypted_file_wire(url="mxc://localhost/encryptedfile"):
    return {
        "url": url,
        "key": {
            "kty": "oct",
            "key_ops": ["encrypt", "decrypt"],
            "alg": "A256CTR",
            "k": "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA",
            "ext": True,
        },
        "iv": "AQEBAQEBAQEBAQEB",
        "hashes": {"sha256": "AQEBAQEBAQEBAQ"},
        "v": "v2",
    }


@pytest.fixture
def encrypted_wire():
    return encrypted_file_wire()


@pytest.fixture
def encrypted_file(encrypted_wire):
    return EncryptedFile.model_validate(encrypted_wire)
