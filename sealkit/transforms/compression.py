#!/usr/bin/env python3
"""Compression transform.

The key selects one of four algorithms:
- lz4   (LZ4 frame format, ``lz4``)
- lzma  (.xz container, standard library)
- zlib  (zlib stream, standard library)
- lzfse (Apple LZFSE, ``pyliblzfse``), the default

Tokens are matched as all-lowercase or all-uppercase ("lz4" or "LZ4").
Anything else, including mixed case and the empty string, selects LZFSE.

Example:
    >>> transform = CompressionTransform("zlib")
    >>> transform.decode(transform.encode(b"Hello World!"))
    b'Hello World!'
"""

import lzma
import zlib
from enum import Enum
from typing import Any, Dict, Optional

import lz4.frame

from sealkit.core.config import get_config_manager
from sealkit.core.constants import ErrorCode, Limits
from sealkit.core.validators import ValidationError, validate_compression_level
from sealkit.transforms.base import Transform, TransformError, TransformType


class CompressionAlgorithm(Enum):
    """Supported compression algorithms."""

    LZ4 = "lz4"
    LZMA = "lzma"
    ZLIB = "zlib"
    LZFSE = "lzfse"


DEFAULT_ALGORITHM = CompressionAlgorithm.LZFSE

_TOKENS = {
    "lz4": CompressionAlgorithm.LZ4,
    "LZ4": CompressionAlgorithm.LZ4,
    "lzma": CompressionAlgorithm.LZMA,
    "LZMA": CompressionAlgorithm.LZMA,
    "zlib": CompressionAlgorithm.ZLIB,
    "ZLIB": CompressionAlgorithm.ZLIB,
}


def resolve_algorithm(token: str) -> CompressionAlgorithm:
    """Map a key token to a compression algorithm.

    Never fails: unrecognized tokens resolve to LZFSE.

    Args:
        token: Algorithm token, e.g. "lz4" or "ZLIB"

    Returns:
        Selected algorithm
    """
    return _TOKENS.get(token, DEFAULT_ALGORITHM)


class CompressionTransform(Transform):
    """Lossless compression with an algorithm chosen by the key."""

    transform_type = TransformType.COMPRESSION

    def __init__(
        self,
        key: str = "",
        name: Optional[str] = None,
        strict: Optional[bool] = None,
        compression_level: Optional[int] = None,
    ):
        """Initialize compression transform.

        Args:
            key: Algorithm token (lz4, lzma, zlib, lzfse)
            name: Transform name
            strict: Raise instead of returning b"" on failure
            compression_level: Level 1-9 for lz4/lzma/zlib, clamped.
                Defaults to ``sealkit.compression.level``.
        """
        super().__init__(key=key, name=name, strict=strict)
        self._algorithm = resolve_algorithm(self.key)

        if compression_level is None:
            compression_level = get_config_manager().get(
                "sealkit.compression.level", Limits.DEFAULT_COMPRESSION_LEVEL
            )
        try:
            self._compression_level = validate_compression_level(compression_level)
        except ValidationError:
            self._compression_level = Limits.DEFAULT_COMPRESSION_LEVEL

        self._logger.debug(
            "Compression transform created",
            transform=self.name,
            algorithm=self._algorithm.value,
            level=self._compression_level,
        )

    @property
    def algorithm(self) -> CompressionAlgorithm:
        """Algorithm resolved from the key."""
        return self._algorithm

    @property
    def compression_level(self) -> int:
        return self._compression_level

    def _encode(self, data: bytes) -> bytes:
        if self._algorithm == CompressionAlgorithm.LZ4:
            return lz4.frame.compress(data, compression_level=self._compression_level)
        elif self._algorithm == CompressionAlgorithm.LZMA:
            return lzma.compress(data, preset=self._compression_level)
        elif self._algorithm == CompressionAlgorithm.ZLIB:
            return zlib.compress(data, self._compression_level)

        # liblzfse rejects empty buffers; an empty payload encodes to nothing
        if not data:
            return b""
        return self._lzfse().compress(data)

    def _decode(self, data: bytes) -> bytes:
        try:
            if self._algorithm == CompressionAlgorithm.LZ4:
                return lz4.frame.decompress(data)
            elif self._algorithm == CompressionAlgorithm.LZMA:
                return lzma.decompress(data)
            elif self._algorithm == CompressionAlgorithm.ZLIB:
                return zlib.decompress(data)
        except (RuntimeError, lzma.LZMAError, zlib.error) as e:
            raise TransformError(
                f"Decompression error ({self._algorithm.value}): {e}",
                self.name,
                ErrorCode.DECODE_ERROR,
            )

        if not data:
            return b""
        return self._lzfse().decompress(data)

    def _lzfse(self):
        """Import the LZFSE binding on first use."""
        try:
            import liblzfse
        except ImportError:
            raise TransformError(
                "liblzfse not installed. Install with: pip install pyliblzfse",
                self.name,
                ErrorCode.DEPENDENCY_ERROR,
            )
        return liblzfse

    def get_metadata(self) -> Dict[str, Any]:
        """Get transform metadata.

        Returns:
            Metadata with compression info
        """
        metadata = super().get_metadata()
        metadata["algorithm"] = self._algorithm.value
        metadata["compression_level"] = self._compression_level
        return metadata
