"""Sample frames delivered by a frame source once per tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class SampleFrame:
    """Immutable run of unsigned byte magnitudes, one per frequency bin."""

    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def of(cls, values: Iterable[int] | bytes | SampleFrame) -> SampleFrame:
        """Coerce *values* into a frame. Raises ValueError on values outside 0..255."""
        if isinstance(values, SampleFrame):
            return values
        if isinstance(values, np.ndarray):
            if values.size and not np.issubdtype(values.dtype, np.integer):
                raise ValueError(f"frame values must be integers, got dtype {values.dtype}")
            if values.size and (values.min() < 0 or values.max() > 255):
                raise ValueError("frame values must be in range(0, 256)")
            return cls(values.astype(np.uint8).tobytes())
        return cls(bytes(values))

    def as_array(self) -> np.ndarray:
        return np.frombuffer(self.data, dtype=np.uint8)

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data
