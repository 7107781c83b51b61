from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ..errors import MalformedEnvelope
from .payloads import CheckPayload, DatePayload, SuccessPayload

SCHEMA_VERSION = 1

ROLE_TICK = "tick"
ROLE_CHECK = "check"
ROLE_CHECK_SUCCESS = "check-success"

CMD_ADD_PROCESSOR_NAME = "add-processor-name"

# role -> payload shape
ROLE_PAYLOADS: Dict[str, Type[BaseModel]] = {
    ROLE_TICK: DatePayload,
    ROLE_CHECK: CheckPayload,
    ROLE_CHECK_SUCCESS: SuccessPayload,
}

P = TypeVar("P", bound=BaseModel)


class Action(BaseModel):
    """
    Wire envelope: one newline-delimited JSON record.

    Notes:
    - `payload` stays raw JSON until a typed view is requested, so records
      with an unknown role can still be logged or forwarded.
    - `requestId` marks a request; `responseId` marks an event or reply.
      Never both.
    """
    model_config = ConfigDict(populate_by_name=True)

    axmsg: StrictInt = Field(..., description="Schema marker, always SCHEMA_VERSION")
    request_id: Optional[StrictInt] = Field(default=None, alias="requestId")
    response_id: Optional[StrictInt] = Field(default=None, alias="responseId")
    role: str = Field(..., min_length=1)
    command: Optional[str] = None
    payload: Optional[Any] = None

    @field_validator("axmsg")
    @classmethod
    def _known_schema(cls, v: int) -> int:
        if v != SCHEMA_VERSION:
            raise ValueError(f"unsupported axmsg version {v}, expected {SCHEMA_VERSION}")
        return v

    @model_validator(mode="after")
    def _one_direction(self) -> "Action":
        if self.request_id is not None and self.response_id is not None:
            raise ValueError("requestId and responseId are mutually exclusive")
        return self

    @classmethod
    def request(
        cls,
        request_id: int,
        role: str,
        payload: Optional[BaseModel] = None,
        command: Optional[str] = None,
    ) -> "Action":
        return cls(
            axmsg=SCHEMA_VERSION,
            request_id=request_id,
            role=role,
            command=command,
            payload=payload.model_dump() if payload is not None else None,
        )

    @classmethod
    def event(cls, response_id: int, role: str, payload: Optional[BaseModel] = None) -> "Action":
        return cls(
            axmsg=SCHEMA_VERSION,
            response_id=response_id,
            role=role,
            payload=payload.model_dump() if payload is not None else None,
        )

    @property
    def correlation_id(self) -> Optional[int]:
        return self.request_id if self.request_id is not None else self.response_id

    def payload_as(self, model: Type[P]) -> P:
        """Validate the raw payload against `model`; wrong shape is a protocol error."""
        if self.payload is None:
            raise MalformedEnvelope(f"role {self.role!r} carries no payload")
        try:
            return model.model_validate(self.payload)
        except ValidationError as e:
            raise MalformedEnvelope(
                f"payload does not match {model.__name__} for role {self.role!r}: {e}"
            ) from e

    def typed_payload(self) -> BaseModel:
        model = ROLE_PAYLOADS.get(self.role)
        if model is None:
            raise MalformedEnvelope(f"no payload shape registered for role {self.role!r}")
        return self.payload_as(model)
