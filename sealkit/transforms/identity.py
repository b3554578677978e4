#!/usr/bin/env python3
"""Identity transform.

Passes payloads through unchanged. Used as a placeholder wherever a
transform is required but no encoding is wanted.

Example:
    >>> IdentityTransform("none").encode(b"data")
    b'data'
"""

from sealkit.transforms.base import Transform, TransformType


class IdentityTransform(Transform):
    """No-op transform; the key is stored but ignored."""

    transform_type = TransformType.IDENTITY

    def _encode(self, data: bytes) -> bytes:
        return data

    def _decode(self, data: bytes) -> bytes:
        return data
