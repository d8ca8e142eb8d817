"""Abstract base class for frame sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from audiorando.frame import SampleFrame


class FrameSource(ABC):
    """Something that produces one :class:`SampleFrame` per tick.

    Every source declares metadata and implements ``is_available`` and
    ``read_frame``. ``read_frame`` raises ``EOFError`` once the source can
    produce no more frames.
    """

    name: str = "unnamed"
    description: str = ""
    platform_requirements: list[str] = []

    def __init__(self, frame_size: int = 128) -> None:
        if frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {frame_size}")
        self.frame_size = frame_size

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the source can operate on this machine."""
        ...

    @abstractmethod
    def read_frame(self) -> SampleFrame:
        """Block for one tick and return a frame of exactly ``frame_size`` bytes."""
        ...

    def close(self) -> None:
        """Release held resources. Safe to call more than once."""

    def __enter__(self) -> FrameSource:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} frame_size={self.frame_size}>"
