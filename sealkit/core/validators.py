"""
SealKit: Input Validators.

Validation for payloads, keys, compression levels and pipeline configuration.
"""
from typing import Any, Dict, List

from sealkit.core.constants import ErrorCode, Limits


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_payload(data: Any) -> bytes:
    """Normalize a bytes-like payload to ``bytes``.

    Args:
        data: bytes, bytearray or memoryview

    Returns:
        The payload as immutable bytes

    Raises:
        ValidationError: If data is not bytes-like
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise ValidationError(f"Payload must be bytes-like, got {type(data).__name__}")


def validate_key(key: Any) -> str:
    """Normalize a transform key to ``str``.

    ``None`` becomes the empty key and bytes are decoded as UTF-8.

    Raises:
        ValidationError: If key is neither str, bytes nor None, or is not valid UTF-8
    """
    if key is None:
        return ""
    if isinstance(key, str):
        return key
    if isinstance(key, (bytes, bytearray)):
        try:
            return bytes(key).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"Key bytes are not valid UTF-8: {e}")
    raise ValidationError(f"Key must be a string, got {type(key).__name__}")


def validate_compression_level(level: Any) -> int:
    """Clamp a compression level to the supported range.

    Raises:
        ValidationError: If level is not an integer
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValidationError(f"Compression level must be an integer, got {level!r}")
    return max(Limits.MIN_COMPRESSION_LEVEL, min(Limits.MAX_COMPRESSION_LEVEL, level))


def validate_pipeline_config(items: Any) -> List[Dict[str, Any]]:
    """Validate a pipeline definition.

    Each item must be a mapping with a ``type`` string and an optional
    ``key`` string.

    Args:
        items: List of transform definitions

    Returns:
        The validated list

    Raises:
        ValidationError: If the definition is malformed
    """
    if not isinstance(items, list):
        raise ValidationError("Pipeline must be a list")

    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Pipeline entry {i} must be a dictionary")
        if not isinstance(item.get("type"), str) or not item["type"]:
            raise ValidationError(f"Pipeline entry {i} must have a 'type' string")
        if "key" in item and item["key"] is not None and not isinstance(item["key"], str):
            raise ValidationError(f"Pipeline entry {i} 'key' must be a string")

    return items
