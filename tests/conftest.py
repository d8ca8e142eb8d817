"""Shared frame fixtures."""

import logging

import pytest

# 0..127: whitening keeps the even values 2..126 (63 bytes)
_RAMP = bytes(range(128))
_RAMP_WHITENED = bytes(range(2, 128, 2))


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI installs so later tests don't log to a closed stream."""
    yield
    logger = logging.getLogger("audiorando")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def ramp():
    return _RAMP


@pytest.fixture
def ramp_whitened():
    return _RAMP_WHITENED


@pytest.fixture
def capture_file(tmp_path):
    """Write ramp frames, after optional silent frames, to a capture file."""

    def _write(frames=4, silent=0, name="capture.bin"):
        path = tmp_path / name
        path.write_bytes(bytes(128) * silent + _RAMP * frames)
        return str(path)

    return _write
