"""Frame source implementations."""

from __future__ import annotations

from audiorando.sources.base import FrameSource
from audiorando.sources.file import FileSource
from audiorando.sources.microphone import MicrophoneSource

# Sources that can be built without arguments
ALL_SOURCES = [
    MicrophoneSource,
]


def detect_available_sources(frame_size: int = 128) -> list[FrameSource]:
    """Instantiate and return all sources available on this machine."""
    available: list[FrameSource] = []
    for cls in ALL_SOURCES:
        try:
            src = cls(frame_size=frame_size)
            if src.is_available():
                available.append(src)
        except Exception:
            continue
    return available


__all__ = [
    "ALL_SOURCES",
    "FileSource",
    "FrameSource",
    "MicrophoneSource",
    "detect_available_sources",
]
