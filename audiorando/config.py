"""
Engine configuration.

All values are fixed at engine start; nothing mutates a config after it is
built. Pass a custom :class:`EngineConfig` to the engine to override the
defaults.
"""

from __future__ import annotations

import hashlib
import string
from dataclasses import dataclass

DEFAULT_CHARSET: str = string.ascii_letters + string.digits + string.punctuation


@dataclass(frozen=True)
class EngineConfig:
    """
    Start-time constants for the harvesting and derivation engine.

    Attributes:
        pool_capacity: Maximum bytes held by the entropy pool.
        frame_size: Bytes per sample frame (frequency bins per tick).
        quality_threshold: Frames scoring at or below this are discarded.
        digest: ``hashlib`` algorithm name used for stretching.
        charset: Alphabet for passwords.
        chunk_size: Pool bytes withdrawn per password, hex or number request.
        number_digits: Display width used for fixed-width numbers.

    Example:
        >>> config = EngineConfig(pool_capacity=1024, quality_threshold=2.5)
    """

    pool_capacity: int = 4096
    frame_size: int = 128
    quality_threshold: float = 1.0
    digest: str = "sha256"
    charset: str = DEFAULT_CHARSET
    chunk_size: int = 32
    number_digits: int = 4

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.pool_capacity <= 0:
            raise ValueError(f"pool_capacity must be positive, got {self.pool_capacity}")
        if self.frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {self.frame_size}")
        if self.quality_threshold < 0:
            raise ValueError(
                f"quality_threshold must be non-negative, got {self.quality_threshold}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_size > self.pool_capacity:
            raise ValueError(
                f"chunk_size ({self.chunk_size}) must not exceed "
                f"pool_capacity ({self.pool_capacity})"
            )
        if self.number_digits <= 0:
            raise ValueError(f"number_digits must be positive, got {self.number_digits}")
        if not self.charset:
            raise ValueError("charset must not be empty")
        if len(set(self.charset)) != len(self.charset):
            raise ValueError("charset must not contain duplicate characters")
        try:
            size = hashlib.new(self.digest).digest_size
        except ValueError:
            raise ValueError(f"Unknown digest {self.digest!r}") from None
        # shake_* report a zero digest size and need an explicit length
        if size == 0:
            raise ValueError(f"digest {self.digest!r} has no fixed output size")


DEFAULT_CONFIG = EngineConfig()
"""Default configuration: 4096-byte pool, 128-bin frames, SHA-256."""
