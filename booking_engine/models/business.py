# booking_engine/models/business.py
"""
Business Model - the bookable venue (restaurant, salon)
Owns services, staff, opening-hour rules and bookings.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking_engine.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    business_type = Column(String(50), nullable=False, default="other")  # restaurant, hair_salon, ...
    booking_link_slug = Column(String(100), nullable=False, unique=True, index=True)

    # Contact information
    description = Column(Text, nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(200), nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)

    # Booking settings
    timezone = Column(String(50), default="UTC")
    booking_advance_days = Column(Integer, default=30)  # How far ahead customers may book
    cancellation_hours = Column(Integer, default=24)
    require_phone = Column(Boolean, default=False)
    require_deposit = Column(Boolean, default=False)

    # Technical fields
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True)

    services = relationship("Service", back_populates="business")
    staff_members = relationship("StaffMember", back_populates="business")

    def __repr__(self):
        return f"<Business(id={self.id}, name={self.name})>"

    def settings_dict(self):
        """Booking settings exposed on the public booking page"""
        return {
            "booking_advance_days": self.booking_advance_days,
            "cancellation_hours": self.cancellation_hours,
            "require_phone": self.require_phone,
            "require_deposit": self.require_deposit,
        }
