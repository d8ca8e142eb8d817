"""Exceptions raised by the entropy engine.

Every failure rejects a single operation and leaves the pool unchanged.
"""

from __future__ import annotations


class EntropyError(Exception):
    """Base class for engine failures."""


class InsufficientEntropy(EntropyError):
    """Raised when a withdrawal asks for more bytes than the pool holds.

    Recoverable: more ticks will refill the pool.

    Args:
        needed: Bytes the operation required.
        available: Bytes pooled at the time of the request.
    """

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"not enough entropy: need {needed} bytes, {available} available"
        )


class InvalidRequest(EntropyError, ValueError):
    """Raised for malformed output parameters (non-positive sizes, bad counts)."""


class InvalidRange(InvalidRequest):
    """Raised when a dice range has ``low >= high``."""

    def __init__(self, low: int, high: int) -> None:
        self.low = low
        self.high = high
        super().__init__(f"invalid dice range: min ({low}) must be less than max ({high})")
