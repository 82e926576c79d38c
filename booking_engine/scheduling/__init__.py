"""
Scheduling core: slot generation and booking validation.

Pure computations over data supplied through a SchedulingReader; no I/O,
no locking, no hidden state.
"""
from .conflicts import booked_party_size, competing_bookings, find_conflict
from .decisions import Accept, Decision, Reject, RejectReason
from .intervals import TimeWindow, add_minutes, day_of_week, format_hhmm, overlaps, parse_hhmm
from .memory import InMemorySchedulingReader
from .reader import SchedulingReader
from .records import (
    ACTIVE_STATUSES, BookingStatus, BookingView, OverrideView, RuleView, ServiceView, StaffView
)
from .slot_generator import Slot, SlotGenerator, SlotListing, generate_slots
from .validator import AvailabilityValidator

__all__ = [
    "ACTIVE_STATUSES",
    "Accept",
    "AvailabilityValidator",
    "BookingStatus",
    "BookingView",
    "Decision",
    "InMemorySchedulingReader",
    "OverrideView",
    "Reject",
    "RejectReason",
    "RuleView",
    "SchedulingReader",
    "ServiceView",
    "Slot",
    "SlotGenerator",
    "SlotListing",
    "StaffView",
    "TimeWindow",
    "add_minutes",
    "booked_party_size",
    "competing_bookings",
    "day_of_week",
    "find_conflict",
    "format_hhmm",
    "generate_slots",
    "overlaps",
    "parse_hhmm",
]
