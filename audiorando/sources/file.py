"""Replay frames from a byte file."""

from __future__ import annotations

import os
import sys
from typing import BinaryIO

from audiorando.frame import SampleFrame
from audiorando.sources.base import FrameSource


class FileSource(FrameSource):
    """Frames cut from a file (``-`` for stdin), ``frame_size`` bytes at a time.

    A trailing partial frame is ignored.
    """

    name = "file"
    description = "Recorded spectrum frames from a file"

    def __init__(self, path: str, frame_size: int = 128) -> None:
        super().__init__(frame_size)
        self.path = path
        self._fh: BinaryIO | None = None

    def is_available(self) -> bool:
        return self.path == "-" or os.path.isfile(self.path)

    def _handle(self) -> BinaryIO:
        if self._fh is None:
            self._fh = sys.stdin.buffer if self.path == "-" else open(self.path, "rb")
        return self._fh

    def read_frame(self) -> SampleFrame:
        data = self._handle().read(self.frame_size)
        if len(data) < self.frame_size:
            raise EOFError(f"{self.path}: no complete frame left")
        return SampleFrame(data)

    def close(self) -> None:
        if self._fh is not None and self.path != "-":
            self._fh.close()
        self._fh = None
