# booking_engine/models/booking.py
from sqlalchemy import Column, String, Integer, Text, Date, DateTime, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking_engine.models.base import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("party_size >= 1", name="ck_bookings_party_size"),
    )

    id = Column(Integer, primary_key=True)

    # References
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id"), nullable=True, index=True)

    # Customer info
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    # Booking details; stored window excludes service buffers
    booking_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM format
    end_time = Column(String(5), nullable=False)  # HH:MM format
    party_size = Column(Integer, nullable=False, default=1)
    special_requests = Column(Text, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=True)

    # Status tracking
    status = Column(String, nullable=False, default="pending")  # pending, confirmed, cancelled, completed

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    service = relationship("Service")
    staff_member = relationship("StaffMember")

    @property
    def confirmation_code(self) -> str:
        return f"BK{self.id:06d}"

    def __repr__(self):
        return f"<Booking(id={self.id}, date={self.booking_date}, {self.start_time}-{self.end_time})>"
