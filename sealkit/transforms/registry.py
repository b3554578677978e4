#!/usr/bin/env python3
"""Transform registry and factory.

Maps variant tags to transform classes so callers select a transform by name
and a key string, then use ``encode``/``decode`` without caring which variant
they got.

Built-in tags (case-insensitive):
- identity, none
- compression, compress
- encryption, aes
- obfuscation, xor

Example:
    >>> transform = create_transform("aes", "secret")
    >>> transform.decode(transform.encode(b"payload"))
    b'payload'
"""

import threading
from typing import Dict, Iterable, List, Optional, Type, Union

from sealkit.core.constants import ErrorCode
from sealkit.transforms.base import Transform, TransformError, TransformType
from sealkit.transforms.compression import CompressionTransform
from sealkit.transforms.encryption import AESTransform
from sealkit.transforms.identity import IdentityTransform
from sealkit.transforms.obfuscation import XorTransform

BUILTIN_TRANSFORMS = {
    TransformType.IDENTITY: (IdentityTransform, ("none",)),
    TransformType.COMPRESSION: (CompressionTransform, ("compress",)),
    TransformType.ENCRYPTION: (AESTransform, ("aes",)),
    TransformType.OBFUSCATION: (XorTransform, ("xor",)),
}


class TransformRegistry:
    """Registry of transform classes keyed by variant tag."""

    def __init__(self):
        self._classes: Dict[str, Type[Transform]] = {}
        self._aliases: Dict[str, str] = {}
        self._lock = threading.RLock()

    @classmethod
    def default(cls) -> "TransformRegistry":
        """Create a registry holding the four built-in variants."""
        registry = cls()
        for transform_type, (transform_cls, aliases) in BUILTIN_TRANSFORMS.items():
            registry.register(transform_type, transform_cls, aliases)
        return registry

    def _normalize(self, tag: Union[str, TransformType]) -> str:
        if isinstance(tag, TransformType):
            return tag.value
        if not isinstance(tag, str):
            raise TransformError(
                f"Transform tag must be a string, got {type(tag).__name__}",
                error_code=ErrorCode.INVALID_INPUT,
            )
        return tag.strip().lower()

    def register(
        self,
        tag: Union[str, TransformType],
        transform_cls: Type[Transform],
        aliases: Iterable[str] = (),
    ) -> None:
        """Register a transform class under a tag and optional aliases.

        Args:
            tag: Primary variant tag
            transform_cls: Transform subclass
            aliases: Alternative tags

        Raises:
            TransformError: If transform_cls is not a Transform subclass
        """
        if not (isinstance(transform_cls, type) and issubclass(transform_cls, Transform)):
            raise TransformError(
                f"{transform_cls!r} is not a Transform subclass",
                error_code=ErrorCode.INVALID_INPUT,
            )

        primary = self._normalize(tag)
        with self._lock:
            self._classes[primary] = transform_cls
            for alias in aliases:
                self._aliases[self._normalize(alias)] = primary

    def unregister(self, tag: Union[str, TransformType]) -> bool:
        """Remove a tag and its aliases.

        Returns:
            True if the tag was registered
        """
        primary = self._resolve(tag)
        with self._lock:
            if primary is None or primary not in self._classes:
                return False
            del self._classes[primary]
            self._aliases = {a: p for a, p in self._aliases.items() if p != primary}
        return True

    def _resolve(self, tag: Union[str, TransformType]) -> Optional[str]:
        normalized = self._normalize(tag)
        with self._lock:
            if normalized in self._classes:
                return normalized
            return self._aliases.get(normalized)

    def get(self, tag: Union[str, TransformType]) -> Type[Transform]:
        """Get the transform class for a tag.

        Raises:
            TransformError: If the tag is unknown
        """
        primary = self._resolve(tag)
        with self._lock:
            if primary is None or primary not in self._classes:
                raise TransformError(
                    f"Unknown transform: {tag}. Available: {', '.join(self.available())}",
                    error_code=ErrorCode.NOT_FOUND,
                )
            return self._classes[primary]

    def create(self, tag: Union[str, TransformType], key: str = "", **options) -> Transform:
        """Construct a transform by tag.

        Args:
            tag: Variant tag or alias
            key: Key string for the transform
            **options: Extra constructor arguments (name, strict, ...)

        Returns:
            New transform instance
        """
        return self.get(tag)(key, **options)

    def available(self) -> List[str]:
        """List primary tags in registration order."""
        with self._lock:
            return list(self._classes.keys())

    def aliases(self) -> Dict[str, str]:
        """Map of alias to primary tag."""
        with self._lock:
            return dict(self._aliases)

    def __contains__(self, tag: object) -> bool:
        try:
            return self._resolve(tag) is not None  # type: ignore[arg-type]
        except TransformError:
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._classes)

    def __repr__(self) -> str:
        return f"<TransformRegistry transforms={self.available()}>"


# Global registry instance
_global_registry: Optional[TransformRegistry] = None


def get_registry() -> TransformRegistry:
    """Get or create the global registry with the built-in variants."""
    global _global_registry
    if _global_registry is None:
        _global_registry = TransformRegistry.default()
    return _global_registry


def set_global_registry(registry: Optional[TransformRegistry]) -> None:
    """Set (or reset with None) the global registry."""
    global _global_registry
    _global_registry = registry


def create_transform(variant: Union[str, TransformType], key: str = "", **options) -> Transform:
    """Construct a transform from the global registry.

    Args:
        variant: Variant tag, e.g. "aes" or TransformType.OBFUSCATION
        key: Key string for the transform
        **options: Extra constructor arguments

    Returns:
        New transform instance
    """
    return get_registry().create(variant, key, **options)
