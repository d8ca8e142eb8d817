"""Output derivation: passwords, hex strings, numbers and dice rolls.

The deriver is handed exactly the bytes it may use and never touches the
pool itself. Derivation is a pure function of (request, chunk).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from audiorando.conditioning import stretch
from audiorando.config import DEFAULT_CONFIG, EngineConfig
from audiorando.dice import DiceEngine
from audiorando.errors import InvalidRange, InvalidRequest


class OutputKind(str, enum.Enum):
    PASSWORD = "password"
    HEX_STRING = "hex"
    NUMBER = "number"
    DICE_ROLL = "dice"


@dataclass(frozen=True)
class OutputRequest:
    """What to generate.

    ``size`` is the password length in characters, or the output length in
    bytes for hex strings and numbers. Dice use ``count``, ``low`` and
    ``high``. Numbers may set ``digits`` for a fixed-width display.
    """

    kind: OutputKind
    size: int = 0
    count: int = 0
    low: int = 0
    high: int = 0
    digits: int | None = None

    @classmethod
    def password(cls, length: int) -> OutputRequest:
        return cls(OutputKind.PASSWORD, size=length)

    @classmethod
    def hex_string(cls, n_bytes: int) -> OutputRequest:
        return cls(OutputKind.HEX_STRING, size=n_bytes)

    @classmethod
    def number(cls, n_bytes: int, digits: int | None = None) -> OutputRequest:
        return cls(OutputKind.NUMBER, size=n_bytes, digits=digits)

    @classmethod
    def dice(cls, count: int, low: int, high: int) -> OutputRequest:
        return cls(OutputKind.DICE_ROLL, count=count, low=low, high=high)

    def validate(self) -> None:
        """Raise InvalidRequest (or InvalidRange) if the parameters are unusable."""
        try:
            kind = OutputKind(self.kind)
        except ValueError:
            raise InvalidRequest(f"unknown output kind {self.kind!r}") from None
        if kind is OutputKind.DICE_ROLL:
            if self.low >= self.high:
                raise InvalidRange(self.low, self.high)
            if self.count < 1:
                raise InvalidRequest(f"dice count must be at least 1, got {self.count}")
            return
        if self.size <= 0:
            raise InvalidRequest(f"{kind.value} size must be positive, got {self.size}")
        if self.digits is not None and self.digits <= 0:
            raise InvalidRequest(f"digits must be positive, got {self.digits}")


@dataclass(frozen=True)
class DerivedOutput:
    """A formatted result and the entropy bytes it consumed."""

    kind: OutputKind
    value: str
    consumed: int
    rolls: tuple[int, ...] = ()


class OutputDeriver:
    """Stretches a chunk with the configured digest and formats the result."""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.digest = config.digest
        self.charset = config.charset
        self.dice = DiceEngine()

    def derive(self, request: OutputRequest, chunk: bytes) -> DerivedOutput:
        request.validate()
        kind = OutputKind(request.kind)

        if kind is OutputKind.DICE_ROLL:
            total, rolls = self.dice.roll_many(request.count, request.low, request.high, chunk)
            return DerivedOutput(
                kind, str(total), DiceEngine.bytes_needed(request.count), tuple(rolls)
            )

        out = stretch(chunk, request.size, self.digest)
        if kind is OutputKind.PASSWORD:
            value = self.format_password(out)
        elif kind is OutputKind.HEX_STRING:
            value = out.hex()
        else:
            value = self.format_number(out, request.digits)
        return DerivedOutput(kind, value, len(chunk))

    def format_password(self, data: bytes) -> str:
        n = len(self.charset)
        return "".join(self.charset[b % n] for b in data)

    @staticmethod
    def format_number(data: bytes, digits: int | None = None) -> str:
        """Big-endian unsigned integer in decimal, optionally fixed to *digits*."""
        value = int.from_bytes(data, "big")
        if digits is None:
            return str(value)
        return str(value % 10**digits).zfill(digits)
