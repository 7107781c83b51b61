from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from .errors import MalformedEnvelope
from .schemas import Action

TERMINATOR = b"\n"


def encode(action: Action) -> bytes:
    """
    One JSON object followed by exactly one terminator byte.

    Unset optional fields are omitted from the record.
    """
    body = action.model_dump_json(by_alias=True, exclude_none=True)
    return body.encode("utf-8") + TERMINATOR


def decode(record: bytes) -> Action:
    """
    Parse one record (terminator optional) into an Action.

    Only the envelope is validated here; payload parsing waits for
    `Action.typed_payload()`.
    """
    if record.endswith(TERMINATOR):
        record = record[: -len(TERMINATOR)]

    try:
        obj: Any = json.loads(record)
    except ValueError as e:
        raise MalformedEnvelope(f"record is not valid JSON: {_preview(record)}") from e

    if not isinstance(obj, dict):
        raise MalformedEnvelope(f"record is not a JSON object: {_preview(record)}")
    if "axmsg" not in obj:
        raise MalformedEnvelope(f"record has no axmsg schema marker: {_preview(record)}")

    try:
        return Action.model_validate(obj)
    except ValidationError as e:
        raise MalformedEnvelope(f"invalid envelope: {e}") from e


def _preview(record: bytes, limit: int = 120) -> str:
    text = record[:limit].decode("utf-8", errors="replace")
    return text + ("..." if len(record) > limit else "")
