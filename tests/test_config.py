"""Tests for engine configuration."""

import dataclasses

import pytest

from audiorando.config import DEFAULT_CHARSET, DEFAULT_CONFIG, EngineConfig


class TestEngineConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.pool_capacity == 4096
        assert DEFAULT_CONFIG.frame_size == 128
        assert DEFAULT_CONFIG.digest == "sha256"
        assert DEFAULT_CONFIG.charset == DEFAULT_CHARSET
        assert DEFAULT_CONFIG.number_digits == 4

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.pool_capacity = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"pool_capacity": 0},
            {"frame_size": -1},
            {"quality_threshold": -0.5},
            {"chunk_size": 0},
            {"chunk_size": 64, "pool_capacity": 32},
            {"number_digits": 0},
            {"charset": ""},
            {"charset": "abca"},
            {"digest": "nope256"},
            {"digest": "shake_128"},
        ],
    )
    def test_rejects(self, overrides):
        with pytest.raises(ValueError):
            EngineConfig(**overrides)

    def test_other_digest(self):
        assert EngineConfig(digest="sha512").digest == "sha512"
