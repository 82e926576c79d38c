"""Outcomes of the availability validator as a closed tagged variant."""
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class RejectReason(str, Enum):
    CLOSED = "closed"
    OUT_OF_HOURS = "out_of_hours"
    CONFLICT = "conflict"


# Human-readable messages surfaced to customers
MSG_CLOSED = "closed that day"
MSG_PAST_DATE = "date is in the past"
MSG_NOT_AVAILABLE = "not available"
MSG_OUT_OF_HOURS = "outside business hours"
MSG_SLOT_TAKEN = "slot already booked"
MSG_NO_CAPACITY = "no capacity"


class Accept(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["accept"] = "accept"

    @property
    def accepted(self) -> bool:
        return True


class Reject(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["reject"] = "reject"
    reason: RejectReason
    message: str

    @property
    def accepted(self) -> bool:
        return False


Decision = Union[Accept, Reject]
