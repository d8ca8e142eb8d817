"""Tests for the harvesting engine."""

import logging

import pytest

from audiorando.conditioning import stretch
from audiorando.config import EngineConfig
from audiorando.derive import OutputKind, OutputRequest
from audiorando.engine import AudioEntropyEngine
from audiorando.errors import InsufficientEntropy, InvalidRange, InvalidRequest
from audiorando.frame import SampleFrame


class TestOnFrame:
    def test_silent_frame_rejected(self):
        engine = AudioEntropyEngine()
        tick = engine.on_frame(bytes(128))
        assert tick.admitted is False
        assert tick.quality == 0.0
        assert tick.pool_level == 0

    def test_score_at_threshold_rejected(self):
        engine = AudioEntropyEngine(EngineConfig(quality_threshold=1.0))
        tick = engine.on_frame(bytes([1, 3] * 64))  # std exactly 1.0
        assert tick.quality == pytest.approx(1.0)
        assert tick.admitted is False
        assert engine.available_entropy() == 0

    def test_noisy_frame_admitted(self, ramp, ramp_whitened):
        engine = AudioEntropyEngine()
        tick = engine.on_frame(SampleFrame(ramp))
        assert tick.admitted is True
        assert tick.whitened_bytes == ramp_whitened
        assert tick.pool_level == 63
        assert engine.last_quality == tick.quality

    def test_wrong_frame_size(self):
        with pytest.raises(ValueError):
            AudioEntropyEngine().on_frame(bytes(range(64)))

    def test_capacity_respected(self, ramp, ramp_whitened):
        engine = AudioEntropyEngine(EngineConfig(pool_capacity=100))
        for _ in range(5):
            tick = engine.on_frame(ramp)
        assert tick.pool_level == 100
        assert engine.pool.peek()[:63] == ramp_whitened


class TestGenerate:
    def test_insufficient(self):
        engine = AudioEntropyEngine()
        with pytest.raises(InsufficientEntropy) as info:
            engine.generate(OutputRequest.password(12))
        assert info.value.needed == 32
        assert info.value.available == 0

    def test_insufficient_leaves_pool(self, ramp):
        engine = AudioEntropyEngine(EngineConfig(chunk_size=64))
        engine.on_frame(ramp)
        with pytest.raises(InsufficientEntropy):
            engine.generate(OutputRequest.hex_string(8))
        assert engine.available_entropy() == 63

    def test_uses_oldest_chunk(self, ramp, ramp_whitened):
        engine = AudioEntropyEngine()
        engine.on_frame(ramp)
        out = engine.generate(OutputRequest.hex_string(32))
        assert out.value == stretch(ramp_whitened[:32], 32).hex()
        assert out.consumed == 32
        assert engine.available_entropy() == 31

    def test_invalid_request_does_not_withdraw(self, ramp):
        engine = AudioEntropyEngine()
        engine.on_frame(ramp)
        with pytest.raises(InvalidRequest):
            engine.generate(OutputRequest.password(0))
        with pytest.raises(InvalidRange):
            engine.generate(OutputRequest.dice(1, 6, 6))
        assert engine.available_entropy() == 63

    def test_dice_withdraws_eight_per_roll(self, ramp):
        engine = AudioEntropyEngine()
        engine.on_frame(ramp)
        out = engine.generate(OutputRequest.dice(3, 1, 6))
        assert out.kind is OutputKind.DICE_ROLL
        assert len(out.rolls) == 3
        assert out.consumed == 24
        assert engine.available_entropy() == 63 - 24

    def test_bytes_needed(self):
        engine = AudioEntropyEngine(EngineConfig(chunk_size=16))
        assert engine.bytes_needed(OutputRequest.password(100)) == 16
        assert engine.bytes_needed(OutputRequest.dice(5, 1, 6)) == 40

    def test_same_frames_same_output(self, ramp):
        a, b = AudioEntropyEngine(), AudioEntropyEngine()
        a.on_frame(ramp)
        b.on_frame(ramp)
        req = OutputRequest.password(20)
        assert a.generate(req) == b.generate(req)

    def test_chunks_never_reused(self, ramp):
        engine = AudioEntropyEngine(EngineConfig(chunk_size=8))
        engine.on_frame(ramp)
        req = OutputRequest.hex_string(16)
        assert engine.generate(req).value != engine.generate(req).value

    def test_logs_request(self, ramp, caplog):
        caplog.set_level(logging.INFO, logger="audiorando")
        engine = AudioEntropyEngine()
        engine.on_frame(ramp)
        out = engine.generate(OutputRequest.password(8))
        assert "Generated password from 32 entropy bytes" in caplog.text
        assert out.value not in caplog.text


class TestResetAndStatus:
    def test_reset(self, ramp):
        engine = AudioEntropyEngine()
        engine.on_frame(ramp)
        engine.reset()
        assert engine.available_entropy() == 0

    def test_status(self, ramp):
        engine = AudioEntropyEngine()
        engine.on_frame(bytes(128))
        engine.on_frame(ramp)
        engine.generate(OutputRequest.number(4))
        s = engine.status()
        assert s["frames_seen"] == 2
        assert s["frames_admitted"] == 1
        assert s["bytes_admitted"] == 63
        assert s["bytes_withdrawn"] == 32
        assert s["pool_level"] == 31
        assert s["requests"] == 1
        assert s["capacity"] == 4096
