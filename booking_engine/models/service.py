# booking_engine/models/service.py
"""
Service Model - a bookable offering (a haircut, a table for four)
Each service belongs to one business and defines duration, capacity and buffers.
"""
from sqlalchemy import (
    Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Text, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking_engine.models.base import Base


class Service(Base):
    """
    Source of truth for price, duration and capacity.
    capacity counts party members the service admits per overlapping window.
    """
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_services_duration_positive"),
        CheckConstraint("capacity >= 1", name="ck_services_capacity_positive"),
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Core service details
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False)

    # Scheduling
    capacity = Column(Integer, nullable=False, default=1)
    requires_staff = Column(Boolean, nullable=False, default=False)
    buffer_before_minutes = Column(Integer, nullable=False, default=0)
    buffer_after_minutes = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    # Relationships
    business = relationship("Business", back_populates="services")
    staff_members = relationship(
        "StaffMember",
        secondary="staff_services",
        back_populates="services"
    )

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, business_id={self.business_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "duration_minutes": self.duration_minutes,
            "price": float(self.price) if self.price is not None else 0.0,
            "capacity": self.capacity,
            "requires_staff": self.requires_staff,
        }
