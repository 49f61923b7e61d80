import base64

import pytest

from utils.encoding import decode_secret, encode_content, encode_secret


def test_secret_is_reversible_and_not_plaintext():
    encoded = encode_secret("1234")
    assert encoded != "1234"
    assert decode_secret(encoded) == "1234"


def test_empty_secret_stays_empty():
    assert encode_secret("") == ""
    assert decode_secret("") == ""


def test_decode_secret_rejects_garbage():
    with pytest.raises(ValueError):
        decode_secret("%%%not-base64%%%")


def test_content_encoding_preserves_multibyte_text():
    text = '{"title": "買い物リスト ✓ café"}'
    encoded = encode_content(text)
    assert encoded.isascii()
    assert base64.b64decode(encoded) == text.encode("utf-8")

