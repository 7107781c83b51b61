from __future__ import annotations

from typing import List


class ProbeError(Exception):
    """Base class for every failure the probe can report."""


class ConfigurationError(ProbeError):
    """Missing or unrecognized MODE / SPEED / EXPECT, or bad stream wiring."""


class MalformedEnvelope(ProbeError):
    """A record that cannot be read as an Action (or its payload under its role)."""


class IOFailure(ProbeError):
    """Read/write/flush failure on a pipe other than a clean end-of-stream."""


class EndOfStream(ProbeError):
    """Input closed with no further data."""


class ValidationFailure(ProbeError):
    """
    Check round-trip did not discover the expected processors.

    `missing` keeps the order of the expectation list.
    """

    def __init__(self, missing: List[str], message: str = "") -> None:
        self.missing = list(missing)
        super().__init__(message or f"missing processors: {', '.join(self.missing)}")
