"""
Read-only views of the records the scheduling core consumes.

Built from ORM rows (``from_attributes``) or plain dicts, so the core never
touches a database session.
"""
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .intervals import TimeWindow, parse_hhmm


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Only these statuses hold time on the schedule
ACTIVE_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)


class _View(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class RuleView(_View):
    """Weekly opening-hours window; staff_member_id None means business-wide"""
    id: Optional[int] = None
    business_id: int
    staff_member_id: Optional[int] = None
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str
    end_time: str
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v):
        parse_hhmm(v)
        return v

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.from_hhmm(self.start_time, self.end_time)


class OverrideView(_View):
    id: Optional[int] = None
    business_id: int
    staff_member_id: Optional[int] = None
    date: date
    is_available: bool = False
    reason: Optional[str] = None


class ServiceView(_View):
    id: int
    business_id: int
    name: str = ""
    duration_minutes: int = Field(..., gt=0)
    capacity: int = Field(1, ge=1)
    requires_staff: bool = False
    buffer_before_minutes: int = Field(0, ge=0)
    buffer_after_minutes: int = Field(0, ge=0)

    @property
    def total_span(self) -> int:
        """Schedule time one instance consumes, buffers included"""
        return self.buffer_before_minutes + self.duration_minutes + self.buffer_after_minutes


class StaffView(_View):
    id: int
    business_id: int
    name: str = ""
    service_ids: Tuple[int, ...] = ()

    def can_perform(self, service_id: int) -> bool:
        return service_id in self.service_ids


class BookingView(_View):
    """
    An existing booking. Buffers come from the booking's own service and
    are not part of the stored window.
    """
    id: Optional[int] = None
    business_id: int
    service_id: int
    staff_member_id: Optional[int] = None
    booking_date: date
    start_time: str
    end_time: str
    party_size: int = Field(1, ge=1)
    status: str = BookingStatus.PENDING.value
    buffer_before_minutes: int = 0
    buffer_after_minutes: int = 0

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.from_hhmm(self.start_time, self.end_time)

    @property
    def occupied_window(self) -> TimeWindow:
        return self.window.padded(self.buffer_before_minutes, self.buffer_after_minutes)
