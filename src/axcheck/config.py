from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .errors import ConfigurationError
from .streams import STDIO


class Mode(str, Enum):
    TICK = "tick"
    COLLECT = "collect"
    CHECK = "check"


_MODE_ALIASES = {
    "tick": Mode.TICK,
    "produce": Mode.TICK,
    "collect": Mode.COLLECT,
    "consume": Mode.COLLECT,
    "check": Mode.CHECK,
}


class Speed(str, Enum):
    UNTETHERED = "untethered"
    FAST = "fast"
    MODERATE = "moderate"
    SLOW = "slow"

    @property
    def interval(self) -> float:
        """Seconds between ticks; 0 means no pacing at all."""
        if self is Speed.UNTETHERED:
            return 0.0
        if self is Speed.FAST:
            return 0.01
        if self is Speed.MODERATE:
            return 0.2
        return 1.0


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return value


class ProbeConfig(BaseModel):
    """
    Resolved configuration for one probe run.

    Notes:
    - Defaults come from the environment (MODE, SPEED, EXPECT, INS, OUTS, LOG_PATH),
      so `.env` files work after `load_dotenv()`.
    - Everything is validated once, here; the driver never re-inspects strings.
    """
    model_config = ConfigDict(validate_default=True, frozen=True)

    mode: Mode = Field(default_factory=lambda: os.getenv("MODE"))
    speed: Optional[Speed] = Field(default_factory=lambda: os.getenv("SPEED"))
    expect: List[str] = Field(default_factory=lambda: os.getenv("EXPECT", ""))
    inputs: List[str] = Field(default_factory=lambda: os.getenv("INS", STDIO))
    outputs: List[str] = Field(default_factory=lambda: os.getenv("OUTS", STDIO))
    source: str = "approx_check"
    log_path: Optional[Path] = Field(default_factory=lambda: os.getenv("LOG_PATH") or None)

    @field_validator("mode", mode="before")
    @classmethod
    def _resolve_mode(cls, v: Any) -> Any:
        if isinstance(v, Mode):
            return v
        if v is None or not str(v).strip():
            raise ValueError("expects value for env MODE")
        key = str(v).strip().lower()
        if key not in _MODE_ALIASES:
            raise ValueError(
                f"expects env MODE to be either tick/produce, collect/consume or check, but got {v!r}"
            )
        return _MODE_ALIASES[key]

    @field_validator("speed", mode="before")
    @classmethod
    def _resolve_speed(cls, v: Any, info: ValidationInfo) -> Any:
        # only tick mode reads SPEED; mode is validated first
        mode = info.data.get("mode")
        if mode is not None and mode is not Mode.TICK:
            return None
        if v is None or isinstance(v, Speed):
            return v
        key = str(v).strip().lower()
        if not key:
            return None
        try:
            return Speed(key)
        except ValueError:
            raise ValueError(
                f"expects env SPEED to be either untethered, fast, moderate or slow, but got {v!r}"
            ) from None

    @field_validator("expect", "inputs", "outputs", mode="before")
    @classmethod
    def _csv(cls, v: Any) -> Any:
        return _split_csv(v)

    @model_validator(mode="after")
    def _mode_requirements(self) -> "ProbeConfig":
        if self.mode is Mode.TICK and self.speed is None:
            raise ValueError("expects env SPEED, if MODE is tick")
        if self.mode is Mode.CHECK and not self.expect:
            raise ValueError("expects env EXPECT, if MODE is check")
        if len(self.inputs) != 1:
            raise ValueError(f"expects exactly 1 input, but got {len(self.inputs)}")
        if len(self.outputs) != 1:
            raise ValueError(f"expects exactly 1 output, but got {len(self.outputs)}")
        return self

    @property
    def input(self) -> str:
        return self.inputs[0]

    @property
    def output(self) -> str:
        return self.outputs[0]


def load_config(**overrides: Any) -> ProbeConfig:
    """
    Build a ProbeConfig; explicit non-None overrides win over the environment.

    Raises:
    - ConfigurationError listing every problem found.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return ProbeConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        msg = str(item.get("msg", ""))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)
