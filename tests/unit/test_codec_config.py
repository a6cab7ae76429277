from pathlib import Path

import pytest

from urlpreview.config.codec_loader import CodecConfig, default_config, load_codec_config

REPO_CONFIG = Path(__file__).resolve().parents[2] / "config" / "url_previews.yaml"


def test_missing_file_yields_defaults(tmp_path):
    cfg = load_codec_config(str(tmp_path / "nope.yaml"))
    assert cfg == default_config()
    assert cfg.encryption_key == "matrix:image:encryption"
    assert cfg.invalid_entry_policy == "fail"
    assert cfg.accept_legacy_keys is True


def test_load_values(tmp_path):
    path = tmp_path / "url_previews.yaml"
    path.write_text(
        "url_previews:\n"
        "  encode:\n"
        "    encryption_key: beeper:image:encryption\n"
        "  decode:\n"
        "    invalid_entry_policy: drop\n"
        "    accept_legacy_keys: false\n"
    )
    cfg = load_codec_config(str(path))
    assert cfg.encryption_key == "beeper:image:encryption"
    assert cfg.invalid_entry_policy == "drop"
    assert cfg.accept_legacy_keys is False
    assert "url_previews" in cfg.raw


def test_empty_file(tmp_path):
    path = tmp_path / "url_previews.yaml"
    path.write_text("")
    assert load_codec_config(str(path)) == default_config()


def test_repository_config_loads():
    assert load_codec_config(str(REPO_CONFIG)) == default_config()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"encryption_key": "og:image"},
        {"invalid_entry_policy": "retry"},
        {"accept_legacy_keys": "yes"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        CodecConfig(**kwargs)
