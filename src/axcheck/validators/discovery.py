from __future__ import annotations

from typing import List, Sequence

from ..errors import ValidationFailure


def missing_processors(expected: Sequence[str], discovered: Sequence[str]) -> List[str]:
    """Expected names absent from `discovered`, in expectation order."""
    found = set(discovered)
    return [name for name in expected if name not in found]


def validate_discovery(expected: Sequence[str], discovered: Sequence[str]) -> None:
    """
    Make the check round-trip pass/fail:
    - an empty discovery list always fails
    - every expected name must have been discovered
    """
    missing = missing_processors(expected, discovered)
    if not discovered:
        message = "no processors discovered"
        if missing:
            message += f", missing processors: {', '.join(missing)}"
        raise ValidationFailure(missing, message)
    if missing:
        raise ValidationFailure(missing)
