"""Signal statistics used to judge sample frames."""

from __future__ import annotations

from collections import Counter

import numpy as np

from audiorando.frame import SampleFrame


def quality_score(frame: SampleFrame | bytes) -> float:
    """Population standard deviation of the frame's byte values.

    A silent or flat spectrum scores close to zero. Returns 0.0 for an
    empty frame.
    """
    data = np.frombuffer(bytes(frame), dtype=np.uint8)
    if len(data) == 0:
        return 0.0
    # ddof=0: divide by N, not N - 1
    return float(np.std(data.astype(np.float64)))


def shannon_entropy(data: np.ndarray | bytes) -> float:
    """Shannon entropy in bits for uint8 data."""
    if isinstance(data, (bytes, bytearray)):
        data = np.frombuffer(bytes(data), dtype=np.uint8)
    data = np.asarray(data).flatten()
    if len(data) == 0:
        return 0.0
    counts = np.array(list(Counter(data.tolist()).values()))
    probs = counts / len(data)
    return float(-np.sum(probs * np.log2(probs + 1e-15)))
