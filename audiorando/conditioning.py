"""Entropy conditioning: pair whitening and hash stretching.

Transforms raw, biased spectrum bytes into pool bytes, and pool bytes into
output streams of any length.
"""

from __future__ import annotations

import hashlib

import numpy as np

from audiorando.frame import SampleFrame


def whiten(frame: SampleFrame | bytes) -> bytes:
    """Von Neumann style debiasing over byte pairs.

    Adjacent pairs (b1, b2) keep b1 unless b1 == b2 or b1 == 0; a trailing
    unpaired byte is dropped. Output is at most half the input and may be
    empty.
    """
    data = np.frombuffer(bytes(frame), dtype=np.uint8)
    n = len(data) - (len(data) % 2)
    pairs = data[:n].reshape(-1, 2)
    mask = (pairs[:, 0] != pairs[:, 1]) & (pairs[:, 0] != 0)
    return pairs[mask, 0].tobytes()


def stretch(chunk: bytes, n_bytes: int, digest: str = "sha256") -> bytes:
    """Expand *chunk* to exactly *n_bytes* by hashing ``chunk || str(counter)``.

    The counter starts at 0 and is encoded as its decimal string. Output is
    a pure function of (chunk, n_bytes, digest).
    """
    result = bytearray()
    counter = 0
    while len(result) < n_bytes:
        h = hashlib.new(digest)
        h.update(chunk)
        h.update(str(counter).encode("ascii"))
        result += h.digest()
        counter += 1
    return bytes(result[:n_bytes])
