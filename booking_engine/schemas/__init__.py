# booking_engine/schemas/__init__.py
from .booking import (
    AvailabilityResponse,
    BookingCreateRequest,
    BookingCreateResponse,
    BookingSummary,
    ErrorResponse,
    SlotResponse,
)
from .business import (
    BookingSettingsSchema,
    BusinessProfileResponse,
    ServiceSummary,
    StaffSummary,
)

__all__ = [
    "AvailabilityResponse",
    "BookingCreateRequest",
    "BookingCreateResponse",
    "BookingSummary",
    "ErrorResponse",
    "SlotResponse",
    "BookingSettingsSchema",
    "BusinessProfileResponse",
    "ServiceSummary",
    "StaffSummary",
]
