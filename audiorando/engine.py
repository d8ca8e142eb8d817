"""Harvesting and generation engine.

The engine is the only object a shell talks to: it is pushed one frame per
tick and asked for outputs on demand. State flows back as plain return
values (:class:`TickResult`, :class:`~audiorando.derive.DerivedOutput`).
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from audiorando.conditioning import whiten
from audiorando.config import DEFAULT_CONFIG, EngineConfig
from audiorando.derive import DerivedOutput, OutputDeriver, OutputKind, OutputRequest
from audiorando.dice import DiceEngine
from audiorando.errors import EntropyError
from audiorando.frame import SampleFrame
from audiorando.pool import EntropyPool
from audiorando.stats import quality_score

logger = logging.getLogger(__name__)


class TickResult(NamedTuple):
    pool_level: int
    quality: float
    admitted: bool
    whitened_bytes: bytes


class AudioEntropyEngine:
    """Quality gate, whitener, pool and deriver wired together.

    Usage::

        engine = AudioEntropyEngine()
        engine.on_frame(frame)                # once per tick
        out = engine.generate(OutputRequest.password(16))
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.pool = EntropyPool(config.pool_capacity)
        self.deriver = OutputDeriver(config)
        self.last_quality = 0.0
        self._frames_seen = 0
        self._frames_admitted = 0
        self._requests = 0

    # ── tick path ──

    def on_frame(self, frame: SampleFrame | bytes) -> TickResult:
        """Score, whiten and pool one frame. Returns the pool level and score."""
        frame = SampleFrame.of(frame)
        if len(frame) != self.config.frame_size:
            raise ValueError(
                f"frame has {len(frame)} bytes, expected {self.config.frame_size}"
            )
        self._frames_seen += 1
        score = quality_score(frame)
        self.last_quality = score

        if score <= self.config.quality_threshold:
            logger.debug("Rejected frame: quality %.2f <= %.2f", score, self.config.quality_threshold)
            return TickResult(self.pool.available_bytes(), score, False, b"")

        whitened = whiten(frame)
        level = self.pool.admit(whitened)
        self._frames_admitted += 1
        logger.debug("Admitted frame: quality %.2f, %d whitened bytes, pool %d",
                     score, len(whitened), level)
        return TickResult(level, score, True, whitened)

    # ── request path ──

    def available_entropy(self) -> int:
        return self.pool.available_bytes()

    def bytes_needed(self, request: OutputRequest) -> int:
        if OutputKind(request.kind) is OutputKind.DICE_ROLL:
            return DiceEngine.bytes_needed(request.count)
        return self.config.chunk_size

    def generate(self, request: OutputRequest) -> DerivedOutput:
        """Withdraw entropy for *request* and derive the output.

        Raises
        ------
        InvalidRequest
            Bad parameters; checked before the pool is touched.
        InsufficientEntropy
            The pool holds fewer bytes than the request needs.
        """
        try:
            request.validate()
            chunk = self.pool.withdraw(self.bytes_needed(request))
        except EntropyError as exc:
            logger.warning("Rejected %r: %s", request, exc)
            raise
        result = self.deriver.derive(request, chunk)
        self._requests += 1
        logger.info("Generated %s from %d entropy bytes", result.kind.value, result.consumed)
        return result

    def reset(self) -> None:
        self.pool.reset()

    def status(self) -> dict:
        report = self.pool.health_report()
        return {
            "pool_level": report["level"],
            "capacity": report["capacity"],
            "last_quality": round(self.last_quality, 3),
            "frames_seen": self._frames_seen,
            "frames_admitted": self._frames_admitted,
            "bytes_admitted": report["admitted_bytes"],
            "bytes_withdrawn": report["withdrawn_bytes"],
            "requests": self._requests,
        }
