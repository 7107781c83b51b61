from __future__ import annotations

from .action import (
    Action,
    SCHEMA_VERSION,
    ROLE_TICK,
    ROLE_CHECK,
    ROLE_CHECK_SUCCESS,
    CMD_ADD_PROCESSOR_NAME,
    ROLE_PAYLOADS,
)
from .payloads import DatePayload, CheckPayload, SuccessPayload, WEEKDAYS

__all__ = [
    "Action",
    "SCHEMA_VERSION",
    "ROLE_TICK",
    "ROLE_CHECK",
    "ROLE_CHECK_SUCCESS",
    "CMD_ADD_PROCESSOR_NAME",
    "ROLE_PAYLOADS",
    "DatePayload",
    "CheckPayload",
    "SuccessPayload",
    "WEEKDAYS",
]
