"""Tests for the tick loops."""

from audiorando.engine import AudioEntropyEngine
from audiorando.frame import SampleFrame
from audiorando.harvest import Harvester, harvest_until
from audiorando.sources import FileSource
from audiorando.sources.base import FrameSource


class _BrokenSource(FrameSource):
    name = "broken"

    def is_available(self):
        return True

    def read_frame(self):
        raise OSError("device unplugged")


class _ShortFrameSource(FrameSource):
    name = "short"

    def is_available(self):
        return True

    def read_frame(self):
        return SampleFrame(bytes(range(1, 65)))


class TestHarvestUntil:
    def test_stops_when_enough(self, capture_file):
        engine = AudioEntropyEngine()
        with FileSource(capture_file(frames=4)) as src:
            ticks = harvest_until(engine, src, needed=100)
        assert ticks == 2
        assert engine.available_entropy() == 126

    def test_stops_at_eof(self, capture_file):
        engine = AudioEntropyEngine()
        with FileSource(capture_file(frames=1, silent=2)) as src:
            ticks = harvest_until(engine, src, needed=1000)
        assert ticks == 3
        assert engine.available_entropy() == 63

    def test_max_ticks(self, capture_file):
        engine = AudioEntropyEngine()
        with FileSource(capture_file(frames=0, silent=10)) as src:
            assert harvest_until(engine, src, needed=32, max_ticks=4) == 4
        assert engine.available_entropy() == 0


class TestHarvester:
    def test_runs_until_source_ends(self, capture_file):
        engine = AudioEntropyEngine()
        with FileSource(capture_file(frames=3)) as src:
            h = Harvester(engine, src)
            h.start()
            h.wait(timeout=5)
        assert not h.running
        assert h.ticks == 3
        assert h.last_tick.pool_level == 189
        assert h.error is None

    def test_records_source_error(self):
        engine = AudioEntropyEngine()
        h = Harvester(engine, _BrokenSource())
        h.start()
        h.wait(timeout=5)
        assert isinstance(h.error, OSError)
        assert h.ticks == 0

    def test_stop(self, capture_file):
        engine = AudioEntropyEngine()
        with FileSource(capture_file(frames=50)) as src:
            with Harvester(engine, src, interval=0.05) as h:
                pass
        assert not h.running
        assert h.ticks < 50

    def test_records_engine_error(self):
        engine = AudioEntropyEngine()
        h = Harvester(engine, _ShortFrameSource(frame_size=64))
        h.start()
        h.wait(timeout=5)
        assert isinstance(h.error, ValueError)
        assert not h.running
        assert h.ticks == 0
        assert engine.available_entropy() == 0
