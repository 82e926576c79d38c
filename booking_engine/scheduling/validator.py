"""
Availability Validator

Authoritative commit-time check for one proposed booking. It re-derives
every constraint from fresh data instead of trusting a generated slot list,
and must run in the same transaction as the booking insert.
"""
import logging
from datetime import date
from typing import Optional

from booking_engine.core.exceptions import NotFoundError

from .conflicts import find_conflict
from .decisions import (
    Accept, Decision, Reject, RejectReason,
    MSG_CLOSED, MSG_NOT_AVAILABLE, MSG_OUT_OF_HOURS, MSG_PAST_DATE,
)
from .intervals import TimeWindow, day_of_week
from .reader import SchedulingReader

logger = logging.getLogger(__name__)


class AvailabilityValidator:
    """Checks schedule, hours, closures and conflicts, in that order"""

    def __init__(self, reader: SchedulingReader):
        self.reader = reader

    def validate(
            self,
            business_id: int,
            service_id: int,
            staff_id: Optional[int],
            day: date,
            start: str,
            end: str,
            party_size: int = 1,
            today: Optional[date] = None
    ) -> Decision:
        """
        Decide whether [start, end) on ``day`` may be booked.

        The first failing check wins:
            1. some active rule exists for the weekday
            2. the buffered window fits inside one rule window
            3. no closure override for the date
            4. no staff overlap / capacity overflow

        Raises:
            NotFoundError: the service does not exist
        """
        service = self.reader.get_service(service_id)
        if service is None:
            raise NotFoundError("Service not found")

        if today is not None and day < today:
            return self._reject(RejectReason.CLOSED, MSG_PAST_DATE, business_id, day, start)

        # 1. Schedule existence
        rules = [r for r in self.reader.list_rules(business_id, staff_id, day_of_week(day)) if r.is_active]
        if not rules:
            return self._reject(RejectReason.CLOSED, MSG_CLOSED, business_id, day, start)

        # 2. Within hours; buffers must fit too
        requested = TimeWindow.from_hhmm(start, end)
        occupied = requested.padded(service.buffer_before_minutes, service.buffer_after_minutes)
        if requested.is_empty or not any(rule.window.contains(occupied) for rule in rules):
            return self._reject(RejectReason.OUT_OF_HOURS, MSG_OUT_OF_HOURS, business_id, day, start)

        # 3. Closure override beats any rule match
        override = self.reader.find_override(business_id, staff_id, day)
        if override is not None and not override.is_available:
            return self._reject(
                RejectReason.CLOSED, override.reason or MSG_NOT_AVAILABLE, business_id, day, start
            )

        # 4. Conflicts against fresh bookings
        bookings = self.reader.list_active_bookings(
            business_id, day, service_id=service.id, staff_id=staff_id
        )
        conflict = find_conflict(requested, bookings, service, staff_id, party_size)
        if conflict is not None:
            return self._reject(RejectReason.CONFLICT, conflict, business_id, day, start)

        return Accept()

    @staticmethod
    def _reject(reason: RejectReason, message: str, business_id: int, day: date, start: str) -> Reject:
        logger.info(f"Rejected booking for business {business_id} on {day} at {start}: {message}")
        return Reject(reason=reason, message=message)
