# ============================================================================
# booking_engine/services/booking/booking_service.py
# ============================================================================
"""Commit path: validate a requested slot and insert the booking atomically"""
import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from booking_engine.config.settings import get_settings
from booking_engine.core.exceptions import BookingStorageError, InvalidRequestError, NotFoundError
from booking_engine.models.booking import Booking
from booking_engine.models.business import Business
from booking_engine.models.service import Service
from booking_engine.models.staff import StaffMember
from booking_engine.scheduling.decisions import (
    Reject, RejectReason, MSG_OUT_OF_HOURS, MSG_SLOT_TAKEN,
)
from booking_engine.scheduling.intervals import add_minutes
from booking_engine.scheduling.records import BookingStatus
from booking_engine.scheduling.validator import AvailabilityValidator
from booking_engine.schemas.booking import BookingCreateRequest
from booking_engine.services.booking.locks import booking_scope_keys, booking_scope_lock
from booking_engine.services.scheduling.booking_window import business_today, is_beyond_advance_window
from booking_engine.services.scheduling.sql_reader import SqlSchedulingReader

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATEs: serialization_failure, deadlock_detected, unique_violation
RETRYABLE_PGCODES = {"40001", "40P01", "23505"}
RETRYABLE_SQLITE_MESSAGES = ("database is locked", "UNIQUE constraint failed")


def is_concurrent_conflict(error: DBAPIError) -> bool:
    """True when the failure came from another booking racing this one"""
    pgcode = getattr(error.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode in RETRYABLE_PGCODES
    message = str(error.orig)
    return any(fragment in message for fragment in RETRYABLE_SQLITE_MESSAGES)


class BookingService:
    """Handles booking creation"""

    @staticmethod
    def create_booking(
            db: Session,
            request: BookingCreateRequest,
            now: Optional[datetime] = None
    ) -> Union[Booking, Reject]:
        """
        Create a booking if the requested slot is still free.

        Returns:
            The persisted Booking on acceptance, or the validator's Reject

        Raises:
            NotFoundError: business, service or staff member unknown
            InvalidRequestError: staff missing/unsuitable, phone missing,
                or the date lies beyond the booking window
            BookingStorageError: a database failure unrelated to concurrent bookings
        """
        business = db.query(Business).filter(
            Business.id == request.business_id,
            Business.is_active.is_(True)
        ).first()
        if not business:
            raise NotFoundError("Business not found")

        service = db.query(Service).filter(
            Service.id == request.service_id,
            Service.business_id == business.id,
            Service.is_active.is_(True)
        ).first()
        if not service:
            raise NotFoundError("Service not found")

        if service.requires_staff and request.staff_member_id is None:
            raise InvalidRequestError("Staff member is required for this service")

        staff = None
        if request.staff_member_id is not None:
            staff = db.query(StaffMember).filter(
                StaffMember.id == request.staff_member_id,
                StaffMember.business_id == business.id,
                StaffMember.is_active.is_(True)
            ).first()
            if not staff:
                raise NotFoundError("Staff member not found")
            if not staff.can_perform(service.id):
                raise InvalidRequestError("Staff member does not offer this service")

        if business.require_phone and not request.customer_phone:
            raise InvalidRequestError("customer_phone is required by this business")

        today = business_today(business, now)
        if is_beyond_advance_window(business, request.booking_date, today):
            raise InvalidRequestError("booking_date is beyond the booking window")

        try:
            end_time = add_minutes(request.start_time, service.duration_minutes)
        except ValueError:
            # Would run past midnight
            return Reject(reason=RejectReason.OUT_OF_HOURS, message=MSG_OUT_OF_HOURS)

        max_attempts = get_settings().BOOKING_MAX_RETRY_ATTEMPTS
        for attempt in range(1, max_attempts + 1):
            try:
                return BookingService._validate_and_insert(
                    db, business, service, staff, request, end_time, today
                )
            except (OperationalError, IntegrityError) as e:
                db.rollback()
                if not is_concurrent_conflict(e):
                    logger.error(f"Database error while creating booking: {e}", exc_info=True)
                    raise BookingStorageError("Booking could not be stored, please try again later") from e
                logger.warning(
                    f"Booking commit attempt {attempt}/{max_attempts} failed for "
                    f"business {business.id} on {request.booking_date}: {e}"
                )
            except Exception as e:
                db.rollback()
                logger.error(f"Error creating booking: {e}", exc_info=True)
                raise

        logger.error(
            f"Giving up on booking for business {business.id} on {request.booking_date} "
            f"after {max_attempts} attempts"
        )
        return Reject(reason=RejectReason.CONFLICT, message=MSG_SLOT_TAKEN)

    @staticmethod
    def _validate_and_insert(
            db: Session,
            business: Business,
            service: Service,
            staff: Optional[StaffMember],
            request: BookingCreateRequest,
            end_time: str,
            today
    ) -> Union[Booking, Reject]:
        """One validate-then-insert attempt under the booking scope lock"""
        staff_id = staff.id if staff else None
        keys = booking_scope_keys(business.id, request.booking_date, service.id, staff_id)

        with booking_scope_lock(db, keys):
            decision = AvailabilityValidator(SqlSchedulingReader(db)).validate(
                business.id,
                service.id,
                staff_id,
                request.booking_date,
                request.start_time,
                end_time,
                party_size=request.party_size,
                today=today,
            )
            if isinstance(decision, Reject):
                db.rollback()
                return decision

            booking = Booking(
                business_id=business.id,
                service_id=service.id,
                staff_member_id=staff_id,
                customer_name=request.customer_name,
                customer_email=request.customer_email,
                customer_phone=request.customer_phone,
                booking_date=request.booking_date,
                start_time=request.start_time,
                end_time=end_time,
                party_size=request.party_size,
                special_requests=request.special_requests,
                total_amount=service.price,
                status=BookingStatus.PENDING.value,
            )
            db.add(booking)
            db.commit()

        db.refresh(booking)
        logger.info(
            f"Created booking {booking.confirmation_code} for business {business.id} "
            f"on {booking.booking_date} {booking.start_time}-{booking.end_time}"
        )
        return booking
