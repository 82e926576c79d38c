"""
Pydantic schemas for booking requests and responses
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date

from booking_engine.scheduling.intervals import format_hhmm, parse_hhmm


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BookingCreateRequest(BaseModel):
    """Schema for a customer booking request"""
    business_id: int
    service_id: int
    staff_member_id: Optional[int] = None

    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: str = Field(..., min_length=3, max_length=200)
    customer_phone: Optional[str] = Field(None, max_length=50)

    booking_date: date
    start_time: str = Field(..., description="HH:MM, business local time")
    party_size: int = Field(default=1, ge=1)
    special_requests: Optional[str] = None

    @field_validator('start_time')
    @classmethod
    def validate_start_time(cls, v):
        """Normalize to zero-padded HH:MM"""
        minutes = parse_hhmm(v)
        if minutes >= 24 * 60:
            raise ValueError('start_time must be before 24:00')
        return format_hhmm(minutes)

    @field_validator('customer_email')
    @classmethod
    def validate_email(cls, v):
        if '@' not in v:
            raise ValueError('customer_email must be an email address')
        return v.strip()


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BookingSummary(BaseModel):
    id: int
    confirmation_code: str
    status: str
    customer_name: str
    service_name: str
    staff_name: Optional[str] = None
    date: date
    start_time: str
    end_time: str
    party_size: int
    total_amount: Optional[float] = None


class BookingCreateResponse(BaseModel):
    success: bool = True
    booking: BookingSummary


class ErrorResponse(BaseModel):
    error: str
    detail: str


class SlotResponse(BaseModel):
    start: str
    end: str
    staff_id: Optional[int] = None
    capacity_remaining: Optional[int] = None


class AvailabilityResponse(BaseModel):
    date: date
    service_id: int
    service_name: str
    duration_minutes: int
    slots: List[SlotResponse]
    message: Optional[str] = None
