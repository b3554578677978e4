"""SealKit Transforms - Reversible byte transforms behind one interface.

This module provides:
- Transform base class, TransformResult, TransformError, TransformType
- IdentityTransform: passthrough
- CompressionTransform: lz4, lzma, zlib, lzfse selected by key
- AESTransform: AES-256-CBC with key-derived IV
- XorTransform: repeating-key XOR obfuscation
- TransformRegistry / create_transform: construct by variant tag
- TransformPipeline: chain transforms
"""

from .base import Operation, Transform, TransformError, TransformResult, TransformType
from .compression import CompressionAlgorithm, CompressionTransform, resolve_algorithm
from .encryption import AESTransform, derive_cipher_key, derive_iv
from .identity import IdentityTransform
from .obfuscation import XorTransform, derive_mask
from .pipeline import TransformPipeline
from .registry import TransformRegistry, create_transform, get_registry, set_global_registry

__all__ = [
    # Base classes
    "Transform",
    "TransformResult",
    "TransformError",
    "TransformType",
    "Operation",
    # Variants
    "IdentityTransform",
    "CompressionTransform",
    "CompressionAlgorithm",
    "resolve_algorithm",
    "AESTransform",
    "derive_iv",
    "derive_cipher_key",
    "XorTransform",
    "derive_mask",
    # Registry
    "TransformRegistry",
    "create_transform",
    "get_registry",
    "set_global_registry",
    # Pipeline
    "TransformPipeline",
]
