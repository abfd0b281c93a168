"""AES-GCM authenticated encryption with a fixed key and nonce."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from bkutil.conv import bytes_to_string, string_to_bytes

VALID_AES128_KEY_SIZE = 16
VALID_AES256_KEY_SIZE = 32

# Never use more than 2**32 random nonces with a given key: a repeat becomes likely.
NONCE_BYTE_SIZE = 12


@runtime_checkable
class Crypto(Protocol):
    """Something that encrypts and decrypts bytes and their string forms."""

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt plaintext."""

    def decrypt(self, encrypted_text: bytes) -> bytes:
        """Decrypt encrypted_text."""

    def encrypt_to_string(self, plaintext: bytes) -> str:
        """Encrypt plaintext and return the result as a string."""

    def decrypt_string(self, encrypted_text: str) -> bytes:
        """Decrypt a string produced by encrypt_to_string."""


class InvalidKeyError(ValueError):
    """Raised when the key is neither 16 nor 32 bytes long."""

    def __init__(self, message: str = "invalid key, should be 16 or 32 bytes") -> None:
        super().__init__(message)


class InvalidNonceError(ValueError):
    """Raised when the nonce is not 12 bytes long."""

    def __init__(self, message: str = "invalid nonce, should be 12 bytes") -> None:
        super().__init__(message)


class AESGcm:
    """AES-128 or AES-256 in GCM mode, bound to one key and one nonce.

    Decryption of tampered or foreign data raises
    ``cryptography.exceptions.InvalidTag``.
    """

    def __init__(self, key: bytes, nonce: bytes) -> None:
        key = bytes(key)
        nonce = bytes(nonce)
        if len(key) not in (VALID_AES128_KEY_SIZE, VALID_AES256_KEY_SIZE):
            raise InvalidKeyError()
        if len(nonce) != NONCE_BYTE_SIZE:
            raise InvalidNonceError()
        self._key = key
        self._nonce = nonce
        self._aead = AESGCM(key)

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt plaintext; the result ends with the 16-byte tag."""
        return self._aead.encrypt(self._nonce, bytes(plaintext), None)

    def decrypt(self, encrypted_text: bytes) -> bytes:
        """Decrypt and authenticate encrypted_text."""
        return self._aead.decrypt(self._nonce, bytes(encrypted_text), None)

    def encrypt_to_string(self, plaintext: bytes) -> str:
        """Encrypt plaintext and carry the raw bytes in a string."""
        return bytes_to_string(self.encrypt(plaintext))

    def decrypt_string(self, encrypted_text: str) -> bytes:
        """Decrypt a string produced by encrypt_to_string."""
        return self.decrypt(string_to_bytes(encrypted_text))