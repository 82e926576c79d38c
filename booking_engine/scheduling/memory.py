"""Reader backed by plain in-memory records (fixtures, embedding, tests)."""
from datetime import date
from typing import Iterable, List, Optional

from .records import BookingView, OverrideView, RuleView, ServiceView, StaffView


class InMemorySchedulingReader:
    """SchedulingReader over lists of view objects"""

    def __init__(
            self,
            rules: Iterable[RuleView] = (),
            overrides: Iterable[OverrideView] = (),
            bookings: Iterable[BookingView] = (),
            services: Iterable[ServiceView] = (),
            staff: Iterable[StaffView] = ()
    ):
        self.rules = list(rules)
        self.overrides = list(overrides)
        self.bookings = list(bookings)
        self.services = {s.id: s for s in services}
        self.staff = {s.id: s for s in staff}

    def add_booking(self, booking: BookingView) -> None:
        self.bookings.append(booking)

    def list_rules(self, business_id: int, staff_id: Optional[int], day_of_week: int) -> List[RuleView]:
        return [
            r for r in self.rules
            if r.business_id == business_id
            and r.day_of_week == day_of_week
            and r.is_active
            and (r.staff_member_id is None or (staff_id is not None and r.staff_member_id == staff_id))
        ]

    def find_override(self, business_id: int, staff_id: Optional[int], day: date) -> Optional[OverrideView]:
        matches = [
            o for o in self.overrides
            if o.business_id == business_id
            and o.date == day
            and (o.staff_member_id is None or (staff_id is not None and o.staff_member_id == staff_id))
        ]
        closures = [o for o in matches if not o.is_available]
        if closures:
            return closures[0]
        return matches[0] if matches else None

    def list_active_bookings(
            self,
            business_id: int,
            day: date,
            service_id: Optional[int] = None,
            staff_id: Optional[int] = None
    ) -> List[BookingView]:
        result = []
        for booking in self.bookings:
            if booking.business_id != business_id or booking.booking_date != day or not booking.is_active:
                continue
            if staff_id is not None and booking.staff_member_id != staff_id:
                continue
            if staff_id is None and service_id is not None and booking.service_id != service_id:
                continue
            result.append(booking)
        return result

    def get_service(self, service_id: int) -> Optional[ServiceView]:
        return self.services.get(service_id)

    def get_staff_member(self, staff_id: int) -> Optional[StaffView]:
        return self.staff.get(staff_id)
