#!/usr/bin/env python3
"""Repeating-key XOR obfuscation.

The payload is XORed with the MD5 digest of the UTF-8 key, repeated to the
payload length. This is obfuscation, not encryption: the 16-byte mask is
trivially recovered from any known plaintext. It is fast, length-preserving
and its own inverse, so encode and decode are the same operation.

Example:
    >>> transform = XorTransform("k")
    >>> transform.encode(transform.encode(b"AAAA"))
    b'AAAA'
"""

import hashlib
from typing import Any, Dict, Optional

from sealkit.transforms.base import Transform, TransformType


def derive_mask(key: str) -> bytes:
    """Derive the XOR mask for a key (16 bytes, never empty)."""
    return hashlib.md5(key.encode("utf-8")).digest()


class XorTransform(Transform):
    """Length-preserving, self-inverse XOR transform."""

    transform_type = TransformType.OBFUSCATION

    def __init__(
        self,
        key: str = "",
        name: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        super().__init__(key=key, name=name, strict=strict)
        self._mask = derive_mask(self.key)
        self._logger.debug("XOR transform created", transform=self.name, mask_size=len(self._mask))

    def _xor(self, data: bytes) -> bytes:
        if not data:
            return b""
        size = len(data)
        repeats, remainder = divmod(size, len(self._mask))
        stream = self._mask * repeats + self._mask[:remainder]
        # XOR the whole buffer as one integer
        value = int.from_bytes(data, "big") ^ int.from_bytes(stream, "big")
        return value.to_bytes(size, "big")

    def _encode(self, data: bytes) -> bytes:
        return self._xor(data)

    def _decode(self, data: bytes) -> bytes:
        return self._xor(data)

    def get_metadata(self) -> Dict[str, Any]:
        metadata = super().get_metadata()
        metadata["mask_size"] = len(self._mask)
        return metadata
