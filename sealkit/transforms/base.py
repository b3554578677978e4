#!/usr/bin/env python3
"""Base classes for reversible byte transforms.

This module provides the foundation for all transforms:
- Transform abstract base class (the ``key`` / ``encode`` / ``decode`` contract)
- TransformResult for returning content together with success/error details
- TransformError for error handling
- TransformType naming the variants

Every transform is configured by a single key string whose meaning depends on
the variant. Whatever the key, construction succeeds; the derived
configuration (algorithm, IV, mask) is computed once and never changes.

``encode``/``decode`` keep the legacy contract: a failure inside the codec or
cipher yields ``b""`` rather than an exception, which means a failed decode
cannot be told apart from an empty plaintext. Use ``encode_result`` /
``decode_result`` (or ``strict=True``) when the difference matters.

Example:
    >>> class ReverseTransform(Transform):
    ...     transform_type = TransformType.IDENTITY
    ...     def _encode(self, data):
    ...         return data[::-1]
    ...     def _decode(self, data):
    ...         return data[::-1]
    ...
    >>> transform = ReverseTransform("unused")
    >>> transform.decode(transform.encode(b"hello"))
    b'hello'
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from sealkit.core.config import get_config_manager
from sealkit.core.constants import ErrorCode
from sealkit.core.logging import get_logger
from sealkit.core.validators import ValidationError, validate_key, validate_payload


class TransformType(Enum):
    """Transform variant."""

    IDENTITY = "identity"  # Passthrough
    COMPRESSION = "compression"  # Lossless compression
    ENCRYPTION = "encryption"  # Symmetric cipher
    OBFUSCATION = "obfuscation"  # Repeating-key XOR


class Operation(Enum):
    """Direction of a transform call."""

    ENCODE = "encode"
    DECODE = "decode"


@dataclass
class TransformResult:
    """Result of an encode or decode call.

    On failure ``content`` is empty, ``success`` is False and ``error``
    carries the message.
    """

    content: bytes
    success: bool = True
    error: Optional[str] = None
    error_code: ErrorCode = ErrorCode.SUCCESS
    metadata: Dict[str, Any] = field(default_factory=dict)
    transform_name: Optional[str] = None
    duration_ms: float = 0.0


class TransformError(Exception):
    """Error during transformation."""

    def __init__(
        self,
        message: str,
        transform_name: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        self.message = message
        self.transform_name = transform_name
        self.error_code = error_code
        super().__init__(message)


def _empty_stats() -> Dict[str, Any]:
    return {
        "total_transforms": 0,
        "successful_transforms": 0,
        "failed_transforms": 0,
        "encodes": 0,
        "decodes": 0,
        "total_duration_ms": 0.0,
    }


class Transform(ABC):
    """Abstract base class for reversible byte transforms.

    Subclasses set ``transform_type`` and implement:
    - _encode(): forward transform, may raise
    - _decode(): inverse transform, may raise

    Optional overrides:
    - get_metadata(): describe the derived configuration (never key material)
    """

    transform_type: TransformType

    def __init__(
        self,
        key: str = "",
        name: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        """Initialize transform.

        Args:
            key: Variant-specific key string
            name: Optional name for this transform
            strict: Raise TransformError from encode/decode instead of
                returning b"" on failure. Defaults to ``sealkit.errors.strict``.

        Raises:
            TransformError: If key is not a string
        """
        try:
            self._key = validate_key(key)
        except ValidationError as e:
            raise TransformError(str(e), name, e.error_code)

        self.name = name or self.transform_type.value
        if strict is None:
            strict = bool(get_config_manager().get("sealkit.errors.strict", False))
        self._strict = strict
        self._logger = get_logger()
        self._stats_lock = threading.Lock()
        self._stats = _empty_stats()

    @property
    def key(self) -> str:
        """Key string this transform was constructed with."""
        return self._key

    @property
    def strict(self) -> bool:
        """Whether encode/decode raise instead of returning b"" on failure."""
        return self._strict

    @abstractmethod
    def _encode(self, data: bytes) -> bytes:
        """Apply the forward transform.

        Raises:
            TransformError: If the transform fails
        """

    @abstractmethod
    def _decode(self, data: bytes) -> bytes:
        """Apply the inverse transform.

        Raises:
            TransformError: If the transform fails
        """

    def encode_result(self, data: bytes) -> TransformResult:
        """Encode data, reporting failures in the result instead of raising."""
        return self._run(Operation.ENCODE, self._encode, data)

    def decode_result(self, data: bytes) -> TransformResult:
        """Decode data, reporting failures in the result instead of raising."""
        return self._run(Operation.DECODE, self._decode, data)

    def encode(self, data: bytes) -> bytes:
        """Encode data.

        Returns:
            Encoded bytes, or b"" if the transform failed (non-strict)

        Raises:
            TransformError: On failure when strict
        """
        return self._unwrap(self.encode_result(data), Operation.ENCODE)

    def decode(self, data: bytes) -> bytes:
        """Decode data.

        Returns:
            Decoded bytes, or b"" if the transform failed (non-strict)

        Raises:
            TransformError: On failure when strict
        """
        return self._unwrap(self.decode_result(data), Operation.DECODE)

    def _run(
        self, operation: Operation, func: Callable[[bytes], bytes], data: bytes
    ) -> TransformResult:
        start_time = time.perf_counter()
        error: Optional[TransformError] = None
        content = b""

        try:
            content = func(validate_payload(data))
        except ValidationError as e:
            error = TransformError(str(e), self.name, e.error_code)
        except TransformError as e:
            error = e
        except Exception as e:
            code = ErrorCode.DECODE_ERROR if operation is Operation.DECODE else ErrorCode.INTERNAL_ERROR
            error = TransformError(f"{type(e).__name__}: {e}", self.name, code)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record(operation, error is None, duration_ms)

        metadata = self.get_metadata()
        metadata["operation"] = operation.value

        if error is not None:
            return TransformResult(
                content=b"",
                success=False,
                error=f"{self.name}: {error.message}",
                error_code=error.error_code,
                metadata=metadata,
                transform_name=self.name,
                duration_ms=duration_ms,
            )

        metadata["output_size"] = len(content)
        return TransformResult(
            content=content,
            metadata=metadata,
            transform_name=self.name,
            duration_ms=duration_ms,
        )

    def _unwrap(self, result: TransformResult, operation: Operation) -> bytes:
        if result.success:
            return result.content

        if self._strict:
            raise TransformError(result.error or "transform failed", self.name, result.error_code)

        self._logger.warning(
            f"{operation.value} failed, returning empty output",
            transform=self.name,
            error_code=result.error_code.name,
            error=result.error,
        )
        return b""

    def _record(self, operation: Operation, success: bool, duration_ms: float) -> None:
        with self._stats_lock:
            self._stats["total_transforms"] += 1
            self._stats["encodes" if operation is Operation.ENCODE else "decodes"] += 1
            if success:
                self._stats["successful_transforms"] += 1
            else:
                self._stats["failed_transforms"] += 1
            self._stats["total_duration_ms"] += duration_ms

    def get_metadata(self) -> Dict[str, Any]:
        """Get transform metadata.

        Returns:
            Metadata dictionary
        """
        return {"transform": self.name, "type": self.transform_type.value}

    def get_stats(self) -> Dict[str, Any]:
        """Get transform statistics.

        Returns:
            Statistics dictionary
        """
        with self._stats_lock:
            stats = self._stats.copy()

        if stats["total_transforms"] > 0:
            stats["avg_duration_ms"] = stats["total_duration_ms"] / stats["total_transforms"]
            stats["success_rate"] = stats["successful_transforms"] / stats["total_transforms"]
        else:
            stats["avg_duration_ms"] = 0.0
            stats["success_rate"] = 0.0

        return stats

    def reset_stats(self) -> None:
        """Reset transform statistics."""
        with self._stats_lock:
            self._stats = _empty_stats()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name} type={self.transform_type.value}>"
