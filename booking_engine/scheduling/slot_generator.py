"""
Slot Generation

Walks each opening-hours window at a fixed stride and offers every
customer-visible window whose buffered span fits inside the rule and does
not conflict with existing bookings.

Advisory only: a listing can go stale before the customer commits, so the
validator re-checks every booking at commit time.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from .conflicts import booked_party_size, find_conflict
from .decisions import MSG_CLOSED, MSG_NOT_AVAILABLE, MSG_PAST_DATE
from .intervals import TimeWindow, day_of_week, format_hhmm
from .reader import SchedulingReader
from .records import BookingView, RuleView, ServiceView

logger = logging.getLogger(__name__)

DEFAULT_GRANULARITY_MINUTES = 15


class Slot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    staff_id: Optional[int] = None
    capacity_remaining: Optional[int] = None


class SlotListing(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    slots: List[Slot] = []
    message: Optional[str] = None


def generate_slots(
        rules: Iterable[RuleView],
        bookings: Iterable[BookingView],
        service: ServiceView,
        staff_id: Optional[int] = None,
        granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES,
        party_size: int = 1
) -> List[Slot]:
    """
    Generate bookable slots for one day.

    Args:
        rules: opening-hours windows that apply to the day
        bookings: existing bookings that day (inactive ones are ignored)
        service: the requested service
        staff_id: staff member to book, or None for service-scoped capacity
        granularity_minutes: cursor stride
        party_size: seats the customer needs (capacity services only)

    Returns:
        Slots sorted by start time, one per distinct start
    """
    if granularity_minutes <= 0:
        raise ValueError("granularity_minutes must be positive")

    bookings = list(bookings)
    span = service.total_span
    accepted = {}

    for rule in rules:
        if not rule.is_active:
            continue
        rule_window = rule.window
        cursor = rule_window.start

        while cursor + span <= rule_window.end:
            visible_start = cursor + service.buffer_before_minutes
            window = TimeWindow(start=visible_start, end=visible_start + service.duration_minutes)

            # Split shifts can produce the same start twice; first one wins
            if window.start not in accepted and find_conflict(
                    window, bookings, service, staff_id, party_size) is None:
                remaining = None
                if staff_id is None:
                    remaining = service.capacity - booked_party_size(window, bookings, service)
                accepted[window.start] = Slot(
                    start=format_hhmm(window.start),
                    end=format_hhmm(window.end),
                    staff_id=staff_id,
                    capacity_remaining=remaining,
                )

            cursor += granularity_minutes

    return [accepted[start] for start in sorted(accepted)]


class SlotGenerator:
    """Fetches rules, overrides and bookings through a reader and lists slots"""

    def __init__(self, reader: SchedulingReader, granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES):
        self.reader = reader
        self.granularity_minutes = granularity_minutes

    def list_slots(
            self,
            business_id: int,
            service: ServiceView,
            day: date,
            staff_id: Optional[int] = None,
            today: Optional[date] = None,
            party_size: int = 1
    ) -> SlotListing:
        # Today itself is still bookable
        if today is not None and day < today:
            return SlotListing(date=day, message=MSG_PAST_DATE)

        rules = self.reader.list_rules(business_id, staff_id, day_of_week(day))
        if not rules:
            return SlotListing(date=day, message=MSG_CLOSED)

        override = self.reader.find_override(business_id, staff_id, day)
        if override is not None and not override.is_available:
            return SlotListing(date=day, message=override.reason or MSG_NOT_AVAILABLE)

        bookings = self.reader.list_active_bookings(
            business_id, day, service_id=service.id, staff_id=staff_id
        )
        slots = generate_slots(
            rules,
            bookings,
            service,
            staff_id=staff_id,
            granularity_minutes=self.granularity_minutes,
            party_size=party_size,
        )

        logger.debug(
            f"Generated {len(slots)} slots for service {service.id} on {day} "
            f"from {len(rules)} rules and {len(bookings)} bookings"
        )
        return SlotListing(date=day, slots=slots)
