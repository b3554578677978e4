#!/usr/bin/env python3
"""Transform pipeline for chaining transforms.

This module provides pipeline execution for transforms:
- Sequential chaining: encode runs transforms in order, decode in reverse
- Halt-on-error or skip-on-error handling
- The same empty-on-failure / strict policy as single transforms
- Pipeline statistics

Example:
    >>> pipeline = TransformPipeline()
    >>> pipeline.add_transform(CompressionTransform("zlib"))
    >>> pipeline.add_transform(AESTransform("secret"))
    >>> pipeline.decode(pipeline.encode(b"payload"))
    b'payload'
"""

import threading
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sealkit.core.config import get_config_manager
from sealkit.core.constants import ErrorCode
from sealkit.core.logging import get_logger
from sealkit.core.validators import ValidationError, validate_payload, validate_pipeline_config
from sealkit.transforms.base import Operation, Transform, TransformError, TransformResult
from sealkit.transforms.registry import TransformRegistry, get_registry


class TransformPipeline:
    """Pipeline for chaining multiple transforms.

    Features:
    - Encode in insertion order, decode in reverse order
    - Graceful error handling (halt or skip the failed step)
    - Performance monitoring
    """

    def __init__(
        self,
        transforms: Optional[Iterable[Transform]] = None,
        halt_on_error: bool = True,
        strict: Optional[bool] = None,
    ):
        """Initialize transform pipeline.

        Args:
            transforms: Initial transforms, in encode order
            halt_on_error: Stop at the first failed step (result is empty).
                When False the failed step is skipped and its input passed on.
            strict: Raise TransformError from encode/decode instead of
                returning b"". Defaults to ``sealkit.errors.strict``.
        """
        self._transforms: List[Transform] = list(transforms or [])
        self._lock = threading.RLock()
        self._halt_on_error = halt_on_error
        if strict is None:
            strict = bool(get_config_manager().get("sealkit.errors.strict", False))
        self._strict = strict
        self._logger = get_logger()

        self._stats = {
            "total_pipelines": 0,
            "successful_pipelines": 0,
            "failed_pipelines": 0,
        }

    @classmethod
    def from_config(
        cls,
        items: List[Mapping[str, Any]],
        registry: Optional[TransformRegistry] = None,
        **kwargs,
    ) -> "TransformPipeline":
        """Build a pipeline from ``[{"type": ..., "key": ...}, ...]``.

        Args:
            items: Transform definitions in encode order
            registry: Registry to resolve types (defaults to global)
            **kwargs: Pipeline options

        Raises:
            TransformError: If the definition is malformed or names an unknown type
        """
        try:
            validate_pipeline_config(items)
        except ValidationError as e:
            raise TransformError(str(e), "pipeline", e.error_code)

        registry = registry or get_registry()
        pipeline = cls(**kwargs)
        for item in items:
            options = {k: v for k, v in item.items() if k not in ("type", "key")}
            pipeline.add_transform(registry.create(item["type"], item.get("key") or "", **options))
        return pipeline

    def add_transform(self, transform: Transform) -> None:
        """Add transform to the end of the encode chain."""
        with self._lock:
            self._transforms.append(transform)

    def remove_transform(self, name: str) -> bool:
        """Remove the first transform with the given name.

        Returns:
            True if transform was removed
        """
        with self._lock:
            for i, transform in enumerate(self._transforms):
                if transform.name == name:
                    self._transforms.pop(i)
                    return True
        return False

    def clear_transforms(self) -> None:
        """Remove all transforms from pipeline."""
        with self._lock:
            self._transforms.clear()

    def get_transforms(self) -> List[Transform]:
        """Get all transforms in encode order (copy)."""
        with self._lock:
            return self._transforms.copy()

    def encode_result(self, data: bytes) -> TransformResult:
        """Run every transform's encode in order."""
        with self._lock:
            transforms = self._transforms.copy()
        return self._run(Operation.ENCODE, transforms, data)

    def decode_result(self, data: bytes) -> TransformResult:
        """Run every transform's decode in reverse order."""
        with self._lock:
            transforms = list(reversed(self._transforms))
        return self._run(Operation.DECODE, transforms, data)

    def encode(self, data: bytes) -> bytes:
        """Encode through the whole chain; b"" on failure unless strict."""
        return self._unwrap(self.encode_result(data), Operation.ENCODE)

    def decode(self, data: bytes) -> bytes:
        """Decode through the whole chain; b"" on failure unless strict."""
        return self._unwrap(self.decode_result(data), Operation.DECODE)

    def _run(
        self, operation: Operation, transforms: List[Transform], data: bytes
    ) -> TransformResult:
        start_time = time.perf_counter()
        try:
            current = validate_payload(data)
        except ValidationError as e:
            return TransformResult(
                content=b"",
                success=False,
                error=f"pipeline: {e}",
                error_code=e.error_code,
                metadata={
                    "operation": operation.value,
                    "transforms_applied": 0,
                    "pipeline_halted": True,
                },
                transform_name="pipeline",
            )

        step_results = []
        failed: Optional[TransformResult] = None

        for transform in transforms:
            if operation is Operation.ENCODE:
                result = transform.encode_result(current)
            else:
                result = transform.decode_result(current)

            step_results.append(
                {
                    "name": transform.name,
                    "success": result.success,
                    "error": result.error,
                    "duration_ms": result.duration_ms,
                }
            )

            if result.success:
                current = result.content
                continue

            failed = failed or result
            if self._halt_on_error:
                break

        with self._lock:
            self._stats["total_pipelines"] += 1
            if failed is None:
                self._stats["successful_pipelines"] += 1
            else:
                self._stats["failed_pipelines"] += 1

        metadata = {
            "operation": operation.value,
            "transforms_applied": len(step_results),
            "transform_results": step_results,
            "pipeline_halted": failed is not None and self._halt_on_error,
        }
        duration_ms = (time.perf_counter() - start_time) * 1000

        if failed is not None and self._halt_on_error:
            return TransformResult(
                content=b"",
                success=False,
                error=failed.error,
                error_code=failed.error_code,
                metadata=metadata,
                transform_name="pipeline",
                duration_ms=duration_ms,
            )

        return TransformResult(
            content=current,
            success=failed is None,
            error=failed.error if failed else None,
            error_code=failed.error_code if failed else ErrorCode.SUCCESS,
            metadata=metadata,
            transform_name="pipeline",
            duration_ms=duration_ms,
        )

    def _unwrap(self, result: TransformResult, operation: Operation) -> bytes:
        if result.success:
            return result.content

        if self._strict:
            raise TransformError(result.error or "pipeline failed", "pipeline", result.error_code)

        # skipped steps leave a usable payload
        if not result.metadata.get("pipeline_halted"):
            return result.content

        self._logger.warning(
            f"pipeline {operation.value} failed, returning empty output",
            error_code=result.error_code.name,
            error=result.error,
        )
        return b""

    def get_stats(self) -> Dict[str, Any]:
        """Get pipeline statistics.

        Per-transform stats are keyed "<position>:<name>" so transforms
        sharing a name stay distinct.
        """
        with self._lock:
            stats: Dict[str, Any] = self._stats.copy()
            stats["transform_stats"] = {
                f"{i}:{t.name}": t.get_stats() for i, t in enumerate(self._transforms)
            }
        return stats

    def reset_stats(self) -> None:
        """Reset pipeline and transform statistics."""
        with self._lock:
            self._stats = {
                "total_pipelines": 0,
                "successful_pipelines": 0,
                "failed_pipelines": 0,
            }
            for transform in self._transforms:
                transform.reset_stats()

    def __len__(self) -> int:
        with self._lock:
            return len(self._transforms)

    def __repr__(self) -> str:
        with self._lock:
            transform_names = [t.name for t in self._transforms]
        return f"<TransformPipeline transforms={transform_names}>"
