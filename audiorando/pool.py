"""Bounded entropy pool.

Holds whitened bytes in arrival order until a generation request withdraws
them. Properties:

1. Length never exceeds capacity
2. Overflow drops the newest excess bytes; resident bytes are never evicted
3. Withdrawals take the oldest bytes first and are all-or-nothing
4. Never blocks: a short pool fails fast with InsufficientEntropy
5. Thread-safe for a tick thread and a request thread
"""

from __future__ import annotations

import logging
import threading

from audiorando.errors import InsufficientEntropy

logger = logging.getLogger(__name__)


class EntropyPool:
    """Thread-safe bounded FIFO byte pool.

    Usage::

        pool = EntropyPool(capacity=4096)
        pool.admit(whitened)
        chunk = pool.withdraw(32)
    """

    def __init__(self, capacity: int = 4096) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._buffer = bytearray()
        self._lock = threading.Lock()
        self._total_admitted = 0
        self._total_dropped = 0
        self._total_withdrawn = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    # ── mutation ──

    def admit(self, data: bytes) -> int:
        """Append *data*, keeping only as many bytes as fit. Returns the new length."""
        with self._lock:
            room = self._capacity - len(self._buffer)
            accepted = data[:room]
            self._buffer.extend(accepted)
            self._total_admitted += len(accepted)
            dropped = len(data) - len(accepted)
            self._total_dropped += dropped
            level = len(self._buffer)
        if dropped:
            logger.debug("Pool full: dropped %d of %d incoming bytes", dropped, len(data))
        return level

    def withdraw(self, k: int) -> bytes:
        """Remove and return the oldest *k* bytes.

        Raises
        ------
        InsufficientEntropy
            If fewer than *k* bytes are pooled. The pool is left untouched.
        """
        if k < 0:
            raise ValueError(f"cannot withdraw a negative byte count ({k})")
        with self._lock:
            available = len(self._buffer)
            if available < k:
                raise InsufficientEntropy(needed=k, available=available)
            out = bytes(self._buffer[:k])
            del self._buffer[:k]
            self._total_withdrawn += k
        logger.debug("Withdrew %d bytes, %d remain", k, available - k)
        return out

    def reset(self) -> None:
        """Discard everything pooled."""
        with self._lock:
            cleared = len(self._buffer)
            self._buffer.clear()
        logger.info("Pool reset, %d bytes discarded", cleared)

    # ── observation ──

    def available_bytes(self) -> int:
        with self._lock:
            return len(self._buffer)

    def peek(self, n: int | None = None) -> bytes:
        """Copy of the oldest *n* pooled bytes (all when None), for display only."""
        with self._lock:
            return bytes(self._buffer if n is None else self._buffer[:n])

    def health_report(self) -> dict:
        with self._lock:
            level = len(self._buffer)
        return {
            "level": level,
            "capacity": self._capacity,
            "fill": level / self._capacity,
            "admitted_bytes": self._total_admitted,
            "dropped_bytes": self._total_dropped,
            "withdrawn_bytes": self._total_withdrawn,
        }

    def __len__(self) -> int:
        return self.available_bytes()

    def __repr__(self) -> str:
        return f"<EntropyPool {self.available_bytes()}/{self._capacity} bytes>"
