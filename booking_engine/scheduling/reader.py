"""Read operations the scheduling core needs from the host application."""
from datetime import date
from typing import List, Optional, Protocol

from .records import BookingView, OverrideView, RuleView, ServiceView, StaffView


class SchedulingReader(Protocol):
    """
    Synchronous, read-only data access injected into the generator and the
    validator. Implementations must return fresh data on every call.
    """

    def list_rules(self, business_id: int, staff_id: Optional[int], day_of_week: int) -> List[RuleView]:
        """Active business-wide rules plus the staff member's own rules for that weekday"""
        ...

    def find_override(self, business_id: int, staff_id: Optional[int], day: date) -> Optional[OverrideView]:
        """Date override for the business or the staff member; closures win over openings"""
        ...

    def list_active_bookings(
            self,
            business_id: int,
            day: date,
            service_id: Optional[int] = None,
            staff_id: Optional[int] = None
    ) -> List[BookingView]:
        """Pending/confirmed bookings that day, for the staff member if given, else for the service"""
        ...

    def get_service(self, service_id: int) -> Optional[ServiceView]:
        ...

    def get_staff_member(self, staff_id: int) -> Optional[StaffView]:
        ...
