"""Dice rolls drawn from withdrawn pool bytes."""

from __future__ import annotations

import numpy as np

from audiorando.errors import InsufficientEntropy, InvalidRange, InvalidRequest

BYTES_PER_ROLL = 8


class DiceEngine:
    """Bounded-range integer rolls with summation.

    Each roll reads the next 8 bytes as a big-endian unsigned 64-bit integer
    and reduces it modulo the range width. The modulo bias is negligible
    for the small ranges dice use.
    """

    @staticmethod
    def bytes_needed(count: int) -> int:
        return BYTES_PER_ROLL * count

    def roll_many(self, count: int, low: int, high: int, chunk: bytes) -> tuple[int, list[int]]:
        """Roll *count* times in ``[low, high]`` inclusive.

        Returns
        -------
        tuple
            ``(total, rolls)`` where *rolls* keeps roll order.
        """
        if low >= high:
            raise InvalidRange(low, high)
        if count < 1:
            raise InvalidRequest(f"dice count must be at least 1, got {count}")
        needed = self.bytes_needed(count)
        if len(chunk) < needed:
            raise InsufficientEntropy(needed=needed, available=len(chunk))

        span = high - low + 1
        words = np.frombuffer(chunk[:needed], dtype=">u8")
        rolls = [int(w) % span + low for w in words]
        return sum(rolls), rolls
