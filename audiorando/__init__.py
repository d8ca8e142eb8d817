"""
audiorando: random values from ambient noise.

Scores microphone spectrum frames, whitens the trustworthy ones into a
bounded entropy pool, and stretches withdrawn pool bytes into passwords,
hex strings, numbers and dice rolls.
"""

__version__ = "0.1.0"

from audiorando.config import DEFAULT_CONFIG, EngineConfig
from audiorando.derive import DerivedOutput, OutputDeriver, OutputKind, OutputRequest
from audiorando.dice import DiceEngine
from audiorando.engine import AudioEntropyEngine, TickResult
from audiorando.errors import EntropyError, InsufficientEntropy, InvalidRange, InvalidRequest
from audiorando.frame import SampleFrame
from audiorando.pool import EntropyPool

__all__ = [
    "AudioEntropyEngine",
    "DEFAULT_CONFIG",
    "DerivedOutput",
    "DiceEngine",
    "EngineConfig",
    "EntropyError",
    "EntropyPool",
    "InsufficientEntropy",
    "InvalidRange",
    "InvalidRequest",
    "OutputDeriver",
    "OutputKind",
    "OutputRequest",
    "SampleFrame",
    "TickResult",
    "__version__",
]
