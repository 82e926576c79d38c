# ============================================================================
# booking_engine/services/scheduling/sql_reader.py
# SchedulingReader over the SQLAlchemy models
# ============================================================================
from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from booking_engine.models.availability import AvailabilityRule, SpecialAvailability
from booking_engine.models.booking import Booking
from booking_engine.models.service import Service
from booking_engine.models.staff import StaffMember
from booking_engine.scheduling.records import (
    ACTIVE_STATUSES, BookingView, OverrideView, RuleView, ServiceView, StaffView
)


class SqlSchedulingReader:
    """Reads fresh rows on every call; never caches between calls"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _scope_filter(model, business_id: int, staff_id: Optional[int]):
        business_wide = (model.business_id == business_id) & (model.staff_member_id.is_(None))
        if staff_id is None:
            return business_wide
        return or_(business_wide, model.staff_member_id == staff_id)

    def list_rules(self, business_id: int, staff_id: Optional[int], day_of_week: int) -> List[RuleView]:
        rules = self.db.query(AvailabilityRule).filter(
            self._scope_filter(AvailabilityRule, business_id, staff_id),
            AvailabilityRule.day_of_week == day_of_week,
            AvailabilityRule.is_active.is_(True)
        ).order_by(AvailabilityRule.start_time, AvailabilityRule.id).all()
        return [RuleView.model_validate(r) for r in rules]

    def find_override(self, business_id: int, staff_id: Optional[int], day: date) -> Optional[OverrideView]:
        # Closures (is_available = False) sort first
        override = self.db.query(SpecialAvailability).filter(
            self._scope_filter(SpecialAvailability, business_id, staff_id),
            SpecialAvailability.date == day
        ).order_by(SpecialAvailability.is_available, SpecialAvailability.id).first()
        return OverrideView.model_validate(override) if override else None

    def list_active_bookings(
            self,
            business_id: int,
            day: date,
            service_id: Optional[int] = None,
            staff_id: Optional[int] = None
    ) -> List[BookingView]:
        query = self.db.query(Booking, Service).join(Service, Booking.service_id == Service.id).filter(
            Booking.business_id == business_id,
            Booking.booking_date == day,
            Booking.status.in_(ACTIVE_STATUSES)
        )
        if staff_id is not None:
            query = query.filter(Booking.staff_member_id == staff_id)
        elif service_id is not None:
            query = query.filter(Booking.service_id == service_id)

        return [
            BookingView(
                id=booking.id,
                business_id=booking.business_id,
                service_id=booking.service_id,
                staff_member_id=booking.staff_member_id,
                booking_date=booking.booking_date,
                start_time=booking.start_time,
                end_time=booking.end_time,
                party_size=booking.party_size,
                status=booking.status,
                buffer_before_minutes=service.buffer_before_minutes or 0,
                buffer_after_minutes=service.buffer_after_minutes or 0,
            )
            for booking, service in query.order_by(Booking.start_time, Booking.id).all()
        ]

    def get_service(self, service_id: int) -> Optional[ServiceView]:
        """Active services only; a retired service cannot be listed or booked"""
        service = self.db.query(Service).filter(
            Service.id == service_id,
            Service.is_active.is_(True)
        ).first()
        return ServiceView.model_validate(service) if service else None

    def get_staff_member(self, staff_id: int) -> Optional[StaffView]:
        staff = self.db.query(StaffMember).filter(
            StaffMember.id == staff_id,
            StaffMember.is_active.is_(True)
        ).first()
        if not staff:
            return None
        return StaffView(
            id=staff.id,
            business_id=staff.business_id,
            name=staff.name,
            service_ids=tuple(s.id for s in staff.services),
        )
