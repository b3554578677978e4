"""
SealKit: Constants

This module provides library-wide constants and error codes.
"""
from enum import IntEnum

# Version information
SEALKIT_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for SealKit operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Non bytes-like payload, bad option value
    NOT_FOUND = 2  # Unknown transform variant or config file
    DEPENDENCY_ERROR = 5  # Missing codec library (e.g. liblzfse)
    INTERNAL_ERROR = 6  # Bug in SealKit
    DECODE_ERROR = 10  # Corrupt stream, bad padding, wrong key


class Limits:
    """Fixed sizes and defaults used by the transforms."""

    # AES
    AES_BLOCK_SIZE = 16  # bytes, also the required IV length
    AES_KEY_SIZE = 32  # bytes, AES-256

    # Repeating-key XOR mask (MD5 digest length)
    XOR_MASK_SIZE = 16

    # Compression levels
    MIN_COMPRESSION_LEVEL = 1
    MAX_COMPRESSION_LEVEL = 9
    DEFAULT_COMPRESSION_LEVEL = 6


# Environment variable prefix for configuration
ENV_PREFIX = "SEALKIT_"

# Logger name used across the package
LOGGER_NAME = "sealkit"
