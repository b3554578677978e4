"""SealKit - keyed reversible byte transforms.

Select a no-op, compression, AES or XOR transform by name and key, then
use ``encode``/``decode`` the same way for all of them:

    >>> from sealkit import create_transform
    >>> aes = create_transform("aes", "secret")
    >>> aes.decode(aes.encode(b"hello world"))
    b'hello world'
"""

from sealkit.core.constants import SEALKIT_VERSION
from sealkit.transforms import (
    AESTransform,
    CompressionAlgorithm,
    CompressionTransform,
    IdentityTransform,
    Transform,
    TransformError,
    TransformPipeline,
    TransformRegistry,
    TransformResult,
    TransformType,
    XorTransform,
    create_transform,
)

__version__ = SEALKIT_VERSION

__all__ = [
    "__version__",
    "Transform",
    "TransformError",
    "TransformResult",
    "TransformType",
    "IdentityTransform",
    "CompressionTransform",
    "CompressionAlgorithm",
    "AESTransform",
    "XorTransform",
    "TransformRegistry",
    "TransformPipeline",
    "create_transform",
]
