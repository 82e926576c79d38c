# booking_engine/models/__init__.py
from .base import Base
from .business import Business
from .service import Service
from .staff import StaffMember, staff_services
from .availability import AvailabilityRule, SpecialAvailability
from .booking import Booking

__all__ = [
    "Base",
    "Business",
    "Service",
    "StaffMember",
    "staff_services",
    "AvailabilityRule",
    "SpecialAvailability",
    "Booking",
]
