# booking_engine/models/availability.py
from sqlalchemy import Column, String, Integer, Boolean, Date, ForeignKey, CheckConstraint
from booking_engine.models.base import Base


class AvailabilityRule(Base):
    """Recurring weekly opening hours, business-wide or for one staff member"""
    __tablename__ = "availability_rules"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_rules_day"),
        CheckConstraint("start_time < end_time", name="ck_availability_rules_window"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id", ondelete="CASCADE"), nullable=True)  # NULL = business-wide

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM format
    end_time = Column(String(5), nullable=False)  # HH:MM format

    is_active = Column(Boolean, default=True)


class SpecialAvailability(Base):
    """Specific date overrides (holidays, vacation, special openings)"""
    __tablename__ = "special_availability"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id", ondelete="CASCADE"), nullable=True)

    date = Column(Date, nullable=False)
    is_available = Column(Boolean, nullable=False, default=False)  # False = closed all day
    reason = Column(String, nullable=True)  # "Holiday", "Vacation", etc.
