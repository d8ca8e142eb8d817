"""Tick loops that feed frames from a source into the engine."""

from __future__ import annotations

import logging
import threading

from audiorando.engine import AudioEntropyEngine, TickResult
from audiorando.sources.base import FrameSource

logger = logging.getLogger(__name__)


def harvest_until(
    engine: AudioEntropyEngine,
    source: FrameSource,
    needed: int,
    max_ticks: int = 1000,
) -> int:
    """Tick until the pool holds *needed* bytes, the ticks run out or the source ends.

    Returns the number of ticks consumed.
    """
    ticks = 0
    while engine.available_entropy() < needed and ticks < max_ticks:
        try:
            frame = source.read_frame()
        except EOFError:
            logger.debug("Source %s exhausted after %d ticks", source.name, ticks)
            break
        engine.on_frame(frame)
        ticks += 1
    return ticks


class Harvester:
    """Background tick loop.

    Runs until :meth:`stop` is called or the source raises ``EOFError``.
    The latest :class:`TickResult` is exposed as :attr:`last_tick`.
    """

    def __init__(self, engine: AudioEntropyEngine, source: FrameSource, interval: float = 0.0) -> None:
        self.engine = engine
        self.source = source
        self.interval = interval
        self.last_tick: TickResult | None = None
        self.ticks = 0
        self.error: Exception | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("harvester already started")
        self._thread = threading.Thread(target=self._run, name="audiorando-harvest", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            while not self._stop.is_set():
                try:
                    frame = self.source.read_frame()
                except EOFError:
                    logger.info("Source %s ended after %d ticks", self.source.name, self.ticks)
                    break
                self.last_tick = self.engine.on_frame(frame)
                self.ticks += 1
                if self.interval:
                    self._stop.wait(self.interval)
        except Exception as exc:
            logger.error("Harvest from %s failed: %s", self.source.name, exc)
            self.error = exc
        finally:
            self._stop.set()

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stop.is_set()

    def wait(self, timeout: float | None = None) -> None:
        """Block until the loop ends on its own (source exhausted or failed)."""
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def __enter__(self) -> Harvester:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
