#!/usr/bin/env python3
"""AES encryption transform.

AES-256 in CBC mode with PKCS7 padding. Both the cipher key and the IV are
derived from the key string:
- cipher key: SHA-256 of the UTF-8 key (32 bytes)
- IV: first 16 characters of the MD5 hex digest of the key, as ASCII

Because the IV depends only on the key, encryption is deterministic: the same
key and plaintext always produce the same ciphertext, and equal plaintext
blocks at the same position leak. There is no integrity protection either; a
tampered ciphertext usually fails the padding check but may decode to garbage.

Example:
    >>> transform = AESTransform("secret")
    >>> transform.decode(transform.encode(b"hello world"))
    b'hello world'
"""

import hashlib
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from sealkit.core.constants import ErrorCode, Limits
from sealkit.transforms.base import Transform, TransformError, TransformType

BLOCK_SIZE_BITS = Limits.AES_BLOCK_SIZE * 8


def derive_iv(key: str) -> bytes:
    """Derive the 16-byte IV for a key.

    An MD5 hex digest is always 32 characters, so the slice is always full
    length, including for the empty key.
    """
    return hashlib.md5(key.encode("utf-8")).hexdigest()[: Limits.AES_BLOCK_SIZE].encode("ascii")


def derive_cipher_key(key: str) -> bytes:
    """Derive the 32-byte AES-256 key for a key string."""
    return hashlib.sha256(key.encode("utf-8")).digest()


class AESTransform(Transform):
    """Symmetric cipher keyed (and IV-seeded) by the key string."""

    transform_type = TransformType.ENCRYPTION

    def __init__(
        self,
        key: str = "",
        name: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        super().__init__(key=key, name=name, strict=strict)
        self._cipher_key = derive_cipher_key(self.key)
        self._iv = derive_iv(self.key)
        self._logger.debug("AES transform created", transform=self.name, mode="CBC")

    @property
    def iv(self) -> bytes:
        """IV derived from the key."""
        return self._iv

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._cipher_key), modes.CBC(self._iv))

    def _encode(self, data: bytes) -> bytes:
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = self._cipher().encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def _decode(self, data: bytes) -> bytes:
        if not data or len(data) % Limits.AES_BLOCK_SIZE:
            raise TransformError(
                f"Ciphertext length {len(data)} is not a positive multiple of "
                f"{Limits.AES_BLOCK_SIZE}",
                self.name,
                ErrorCode.DECODE_ERROR,
            )

        decryptor = self._cipher().decryptor()
        padded = decryptor.update(data) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            raise TransformError(
                f"Invalid padding (wrong key or corrupt data): {e}",
                self.name,
                ErrorCode.DECODE_ERROR,
            )

    def get_metadata(self) -> Dict[str, Any]:
        metadata = super().get_metadata()
        metadata["cipher"] = "AES-256-CBC"
        return metadata
