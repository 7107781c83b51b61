"""
axcheck package.

Conformance probe for pipe-connected approx pipelines:
- tick: synthesize calendar-day events at a chosen rate
- collect: forward every input record to output unchanged
- check: one processor-discovery round-trip, pass/fail by exit status
"""
from __future__ import annotations

from .codec import decode, encode
from .config import Mode, ProbeConfig, Speed, load_config
from .driver import ModeDriver, ProbeState
from .errors import (
    ConfigurationError,
    EndOfStream,
    IOFailure,
    MalformedEnvelope,
    ProbeError,
    ValidationFailure,
)
from .logger import Diagnostics
from .pacing import Pacer
from .schemas import Action
from .streams import StreamReader, StreamWriter

__all__ = [
    "Action",
    "ConfigurationError",
    "Diagnostics",
    "EndOfStream",
    "IOFailure",
    "MalformedEnvelope",
    "Mode",
    "ModeDriver",
    "Pacer",
    "ProbeConfig",
    "ProbeError",
    "ProbeState",
    "Speed",
    "StreamReader",
    "StreamWriter",
    "ValidationFailure",
    "decode",
    "encode",
    "load_config",
]
