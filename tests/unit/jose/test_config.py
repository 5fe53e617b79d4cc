"""Tests for JOSEConfig and security profiles."""

from __future__ import annotations

import pytest

from src.jose.config import DEFAULT_MAX_DECOMPRESSED_SIZE, JOSEConfig, SecurityProfile


class TestJOSEConfig:
    def test_defaults(self) -> None:
        config = JOSEConfig()

        assert config.accepted_algorithms == frozenset({"dir"})
        assert config.accepted_methods == frozenset(
            {"A128CBC-HS256", "A256CBC-HS512", "A128GCM", "A256GCM"}
        )
        assert config.accepted_compression == frozenset({"DEF"})
        assert config.max_decompressed_size == DEFAULT_MAX_DECOMPRESSED_SIZE

    def test_frozen(self) -> None:
        config = JOSEConfig()
        with pytest.raises(AttributeError):
            config.max_decompressed_size = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"accepted_algorithms": frozenset()},
            {"accepted_algorithms": frozenset({"RSA-OAEP"})},
            {"accepted_methods": frozenset()},
            {"accepted_methods": frozenset({"A192GCM"})},
            {"accepted_compression": frozenset({"GZIP"})},
            {"max_decompressed_size": 0},
        ],
    )
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            JOSEConfig(**kwargs)

    def test_empty_compression_allowed(self) -> None:
        assert JOSEConfig(accepted_compression=frozenset()).accepted_compression == frozenset()


class TestProfiles:
    def test_default_profile(self) -> None:
        assert JOSEConfig.from_profile(SecurityProfile.DEFAULT) == JOSEConfig()

    def test_aead_only_profile(self) -> None:
        config = JOSEConfig.from_profile(SecurityProfile.AEAD_ONLY)

        assert config.accepted_methods == frozenset({"A128GCM", "A256GCM"})
        assert config.accepted_compression == frozenset()
