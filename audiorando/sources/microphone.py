"""Microphone spectrum source (requires sounddevice)."""

from __future__ import annotations

import numpy as np

from audiorando.frame import SampleFrame
from audiorando.sources.base import FrameSource

MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0


def spectrum_to_bytes(samples: np.ndarray, frame_size: int) -> bytes:
    """Byte magnitudes of the first *frame_size* frequency bins of *samples*.

    Blackman-windowed real FFT, magnitudes in decibels, with
    ``[MIN_DECIBELS, MAX_DECIBELS]`` mapped linearly onto 0..255 and clipped.
    """
    samples = np.asarray(samples, dtype=np.float64).flatten()
    mags = np.abs(np.fft.rfft(samples * np.blackman(len(samples)))) / max(len(samples), 1)
    db = 20.0 * np.log10(mags[:frame_size] + 1e-12)
    scaled = (db - MIN_DECIBELS) * 255.0 / (MAX_DECIBELS - MIN_DECIBELS)
    out = np.clip(scaled, 0, 255).astype(np.uint8)
    if len(out) < frame_size:
        out = np.pad(out, (0, frame_size - len(out)))
    return out.tobytes()


class MicrophoneSource(FrameSource):
    """Ambient sound spectrum from the default input device.

    Each tick records ``2 * frame_size`` mono samples and keeps the first
    ``frame_size`` frequency bins. Requires the ``sounddevice`` optional
    dependency and a microphone.
    """

    name = "microphone"
    description = "Ambient sound spectrum from the default input device"
    platform_requirements = ["sounddevice", "microphone"]

    def __init__(self, frame_size: int = 128, samplerate: int = 44100, device=None) -> None:
        super().__init__(frame_size)
        self.samplerate = samplerate
        self.device = device

    def is_available(self) -> bool:
        try:
            import sounddevice as sd

            devs = sd.query_devices()
            return any(d.get("max_input_channels", 0) > 0 for d in devs)  # type: ignore[union-attr]
        except Exception:
            return False

    def read_frame(self) -> SampleFrame:
        import sounddevice as sd

        audio = sd.rec(
            2 * self.frame_size,
            samplerate=self.samplerate,
            channels=1,
            dtype="float32",
            device=self.device,
            blocking=True,
        )
        return SampleFrame(spectrum_to_bytes(audio, self.frame_size))
