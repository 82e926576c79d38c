"""
Conflict predicate shared by the slot generator and the validator.

Both paths must agree on what a conflict is, so the capacity and overlap
rules live here and nowhere else.
"""
from typing import Iterable, List, Optional

from .decisions import MSG_NO_CAPACITY, MSG_SLOT_TAKEN
from .intervals import TimeWindow
from .records import BookingView, ServiceView


def competing_bookings(
        bookings: Iterable[BookingView],
        service_id: int,
        staff_id: Optional[int] = None
) -> List[BookingView]:
    """
    Active bookings that draw on the same resource as the request.

    With a staff member the resource is that person, whatever service they
    are booked for. Without one it is the service itself.
    """
    if staff_id is not None:
        return [b for b in bookings if b.is_active and b.staff_member_id == staff_id]
    return [b for b in bookings if b.is_active and b.service_id == service_id]


def booked_party_size(
        window: TimeWindow,
        bookings: Iterable[BookingView],
        service: ServiceView
) -> int:
    """Sum of party sizes of active bookings of ``service`` overlapping ``window``"""
    occupied = window.padded(service.buffer_before_minutes, service.buffer_after_minutes)
    return sum(
        b.party_size
        for b in competing_bookings(bookings, service.id)
        if occupied.overlaps(b.occupied_window)
    )


def find_conflict(
        window: TimeWindow,
        bookings: Iterable[BookingView],
        service: ServiceView,
        staff_id: Optional[int] = None,
        party_size: int = 1
) -> Optional[str]:
    """
    Decide whether ``window`` (customer-visible, buffers excluded) can take
    a party of ``party_size``.

    Returns None when it fits, else the rejection message.
    """
    occupied = window.padded(service.buffer_before_minutes, service.buffer_after_minutes)
    overlapping = [
        b for b in competing_bookings(bookings, service.id, staff_id)
        if occupied.overlaps(b.occupied_window)
    ]

    # A staff member serves one customer at a time regardless of capacity
    if staff_id is not None:
        return MSG_SLOT_TAKEN if overlapping else None

    if party_size > service.capacity:
        return MSG_NO_CAPACITY

    if service.capacity <= 1:
        return MSG_SLOT_TAKEN if overlapping else None

    booked = sum(b.party_size for b in overlapping)
    if booked + party_size > service.capacity:
        return MSG_NO_CAPACITY
    return None
