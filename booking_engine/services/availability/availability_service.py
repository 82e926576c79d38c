# booking_engine/services/availability/availability_service.py
from datetime import date, datetime
from typing import Optional
from sqlalchemy.orm import Session
import logging

from booking_engine.config.settings import get_settings
from booking_engine.core.exceptions import InvalidRequestError, NotFoundError
from booking_engine.models.business import Business
from booking_engine.scheduling.slot_generator import SlotGenerator, SlotListing
from booking_engine.services.scheduling.booking_window import business_today, is_beyond_advance_window
from booking_engine.services.scheduling.sql_reader import SqlSchedulingReader

logger = logging.getLogger(__name__)

MSG_TOO_FAR_AHEAD = "date is beyond the booking window"


class AvailabilityService:
    """Customer-facing slot listing (advisory, read-only)"""

    @staticmethod
    def get_available_slots(
            db: Session,
            business_id: int,
            service_id: int,
            day: date,
            staff_id: Optional[int] = None,
            party_size: int = 1,
            now: Optional[datetime] = None
    ) -> tuple:
        """
        List bookable slots for one service on one day.

        Returns:
            (ServiceView, SlotListing)

        Raises:
            NotFoundError: business, service or staff member unknown
            InvalidRequestError: staff member cannot perform the service
        """
        business = db.query(Business).filter(
            Business.id == business_id,
            Business.is_active.is_(True)
        ).first()
        if not business:
            raise NotFoundError("Business or service not found")

        reader = SqlSchedulingReader(db)
        service = reader.get_service(service_id)
        if service is None or service.business_id != business.id:
            raise NotFoundError("Business or service not found")

        if staff_id is not None:
            staff = reader.get_staff_member(staff_id)
            if staff is None or staff.business_id != business.id:
                raise NotFoundError("Staff member not found")
            if not staff.can_perform(service.id):
                raise InvalidRequestError("Staff member does not offer this service")

        today = business_today(business, now)
        if is_beyond_advance_window(business, day, today):
            return service, SlotListing(date=day, message=MSG_TOO_FAR_AHEAD)

        generator = SlotGenerator(reader, granularity_minutes=get_settings().SLOT_GRANULARITY_MINUTES)
        listing = generator.list_slots(
            business.id,
            service,
            day,
            staff_id=staff_id,
            today=today,
            party_size=party_size,
        )

        logger.info(
            f"Listed {len(listing.slots)} slots for business {business_id}, "
            f"service {service_id}, staff {staff_id} on {day}"
        )
        return service, listing
