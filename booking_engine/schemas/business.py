"""
Pydantic schemas for the public booking page
"""
from pydantic import BaseModel
from typing import Optional, List


class ServiceSummary(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    duration_minutes: int
    price: float
    capacity: int
    requires_staff: bool

    class Config:
        from_attributes = True


class StaffSummary(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    services: List[ServiceSummary]


class BookingSettingsSchema(BaseModel):
    booking_advance_days: Optional[int] = None
    cancellation_hours: Optional[int] = None
    require_phone: bool = False
    require_deposit: bool = False


class BusinessProfileResponse(BaseModel):
    """Everything the booking form needs to render"""
    id: int
    name: str
    type: str
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    services: List[ServiceSummary]
    staff_members: List[StaffSummary]
    settings: BookingSettingsSchema
