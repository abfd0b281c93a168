import pytest
from cryptography.exceptions import InvalidTag

from bkutil.aes_gcm import (
    AESGcm,
    InvalidKeyError,
    InvalidNonceError,
)
from bkutil.conv import bytes_to_string

KEY_32 = b"AES256Key-32Characters1234567890"
NONCE = b"WA7ChYcNFnCS"
PLAINTEXT = b"exampleplaintext"
ENCRYPTED = bytes(
    [148, 205, 172, 75, 6, 179, 220, 244, 255, 30, 115, 122, 55, 205, 243, 240,
     125, 149, 164, 203, 228, 253, 252, 76, 222, 14, 124, 180, 56, 36, 142, 80]
)


@pytest.fixture
def aes():
    return AESGcm(KEY_32, NONCE)


def test_invalid_key():
    with pytest.raises(InvalidKeyError) as info:
        AESGcm(b"abc", NONCE)
    assert "invalid key, should be 16 or 32 bytes" in str(info.value)


def test_invalid_nonce():
    with pytest.raises(InvalidNonceError) as info:
        AESGcm(KEY_32, b"abc")
    assert "invalid nonce, should be 12 bytes" in str(info.value)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        AESGcm(b"x" * 24, NONCE)


def test_encrypt(aes):
    assert aes.encrypt(PLAINTEXT) == ENCRYPTED


def test_decrypt(aes):
    assert aes.decrypt(ENCRYPTED) == PLAINTEXT


def test_encrypt_to_string(aes):
    assert aes.encrypt_to_string(PLAINTEXT) == bytes_to_string(ENCRYPTED)


def test_decrypt_string(aes):
    assert aes.decrypt_string(bytes_to_string(ENCRYPTED)) == PLAINTEXT


def test_plaintext_not_modified(aes):
    buf = bytearray(PLAINTEXT)
    aes.encrypt(buf)
    assert bytes(buf) == PLAINTEXT


def test_aes128_round_trip():
    key_16 = b"placeholder".ljust(16, b"-")
    cipher = AESGcm(key_16, NONCE)
    text = b"http://www.test.com?foo=bar&hello=world"
    encrypted = cipher.encrypt(text)
    assert len(encrypted) == len(text) + 16
    assert cipher.decrypt(encrypted) == text


def test_string_round_trip(aes):
    text = b"some text \x00\xff"
    assert aes.decrypt_string(aes.encrypt_to_string(text)) == text


def test_tampered_text_fails(aes):
    tampered = bytearray(ENCRYPTED)
    tampered[0] ^= 1
    with pytest.raises(InvalidTag):
        aes.decrypt(bytes(tampered))


def test_other_nonce_fails():
    other = AESGcm(KEY_32, b"000000000000")
    with pytest.raises(InvalidTag):
        other.decrypt(ENCRYPTED)