from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, Field

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class DatePayload(BaseModel):
    """
    Payload of a `tick` Action: one simulated calendar day.
    """
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=1, le=12)
    year: int
    weekday: str

    @classmethod
    def from_date(cls, d: date) -> "DatePayload":
        return cls(day=d.day, month=d.month, year=d.year, weekday=WEEKDAYS[d.weekday()])


class CheckPayload(BaseModel):
    """
    Payload of a `check` Action.

    Request carries an empty list; each processor in the pipeline appends its name.
    """
    processors: List[str] = Field(default_factory=list)


class SuccessPayload(BaseModel):
    success: bool
