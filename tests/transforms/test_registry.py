#!/usr/bin/env python3
"""Tests for TransformRegistry and create_transform."""

import pytest

from sealkit.core.constants import ErrorCode
from sealkit.transforms.base import Transform, TransformError, TransformType
from sealkit.transforms.compression import CompressionAlgorithm, CompressionTransform
from sealkit.transforms.encryption import AESTransform
from sealkit.transforms.identity import IdentityTransform
from sealkit.transforms.obfuscation import XorTransform
from sealkit.transforms.registry import (
    TransformRegistry,
    create_transform,
    get_registry,
    set_global_registry,
)


class TestDefaultRegistry:
    """Tests for the built-in variants."""

    def test_exactly_four_variants(self):
        registry = TransformRegistry.default()

        assert registry.available() == ["identity", "compression", "encryption", "obfuscation"]
        assert len(registry) == 4

    @pytest.mark.parametrize(
        "tag, cls",
        [
            ("identity", IdentityTransform),
            ("none", IdentityTransform),
            ("compression", CompressionTransform),
            ("compress", CompressionTransform),
            ("encryption", AESTransform),
            ("aes", AESTransform),
            ("AES", AESTransform),
            ("obfuscation", XorTransform),
            (" xor ", XorTransform),
            (TransformType.OBFUSCATION, XorTransform),
        ],
    )
    def test_lookup(self, tag, cls):
        assert TransformRegistry.default().get(tag) is cls

    def test_unknown_tag(self):
        with pytest.raises(TransformError) as exc_info:
            TransformRegistry.default().get("rot13")

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
        assert "Available: identity, compression" in exc_info.value.message

    def test_non_string_tag(self):
        with pytest.raises(TransformError) as exc_info:
            TransformRegistry.default().get(42)

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_contains(self):
        registry = TransformRegistry.default()

        assert "aes" in registry
        assert TransformType.IDENTITY in registry
        assert "rot13" not in registry
        assert 42 not in registry

    def test_aliases(self):
        assert TransformRegistry.default().aliases() == {
            "none": "identity",
            "compress": "compression",
            "aes": "encryption",
            "xor": "obfuscation",
        }


class TestCreate:
    """Tests for construction by tag."""

    def test_create_passes_key_and_options(self):
        transform = TransformRegistry.default().create("aes", "secret", name="vault", strict=True)

        assert isinstance(transform, AESTransform)
        assert transform.key == "secret"
        assert transform.name == "vault"
        assert transform.strict is True

    def test_create_compression_with_level(self):
        transform = create_transform("compress", "LZMA", compression_level=2)

        assert transform.algorithm == CompressionAlgorithm.LZMA
        assert transform.compression_level == 2

    @pytest.mark.parametrize("tag", ["identity", "compression", "aes", "xor"])
    def test_uniform_interface(self, tag):
        """Every variant is used the same way once constructed."""
        key = "zlib" if tag == "compression" else "secret"
        transform = create_transform(tag, key)

        assert isinstance(transform, Transform)
        assert transform.decode(transform.encode(b"uniform payload")) == b"uniform payload"

    @pytest.mark.parametrize("tag", ["identity", "compression", "aes", "xor"])
    def test_empty_key_construction(self, tag):
        assert create_transform(tag, "").key == ""


class TestRegistration:
    """Tests for register / unregister."""

    def test_register_custom(self):
        class Upper(IdentityTransform):
            pass

        registry = TransformRegistry()
        registry.register("upper", Upper, aliases=["UP"])

        assert registry.get("up") is Upper
        assert registry.available() == ["upper"]

    def test_register_rejects_non_transform(self):
        with pytest.raises(TransformError):
            TransformRegistry().register("bad", dict)

    def test_unregister_via_alias(self):
        registry = TransformRegistry.default()

        assert registry.unregister("xor") is True
        assert "obfuscation" not in registry
        assert "xor" not in registry
        assert registry.unregister("xor") is False

    def test_repr(self):
        assert repr(TransformRegistry()) == "<TransformRegistry transforms=[]>"


class TestGlobalRegistry:
    """Tests for the module-level registry."""

    def test_get_registry_cached(self):
        assert get_registry() is get_registry()

    def test_set_global_registry(self):
        registry = TransformRegistry()
        registry.register("plain", IdentityTransform)
        set_global_registry(registry)

        assert isinstance(create_transform("plain"), IdentityTransform)
        with pytest.raises(TransformError):
            create_transform("aes", "secret")
