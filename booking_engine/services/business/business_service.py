# booking_engine/services/business/business_service.py
"""Public business profile for the booking page"""
import logging
from sqlalchemy.orm import Session

from booking_engine.core.exceptions import NotFoundError
from booking_engine.models.business import Business
from booking_engine.schemas.business import (
    BookingSettingsSchema, BusinessProfileResponse, ServiceSummary, StaffSummary
)

logger = logging.getLogger(__name__)


class BusinessService:

    @staticmethod
    def get_public_profile(db: Session, slug: str) -> BusinessProfileResponse:
        business = db.query(Business).filter(
            Business.booking_link_slug == slug,
            Business.is_active.is_(True)
        ).first()
        if not business:
            raise NotFoundError("Business not found")

        services = sorted(
            (s for s in business.services if s.is_active),
            key=lambda s: s.name
        )
        staff_members = [
            StaffSummary(
                id=staff.id,
                name=staff.name,
                description=staff.description,
                services=[ServiceSummary(**s.to_dict()) for s in staff.services if s.is_active],
            )
            for staff in sorted(business.staff_members, key=lambda s: s.id)
            if staff.is_active
        ]

        return BusinessProfileResponse(
            id=business.id,
            name=business.name,
            type=business.business_type,
            description=business.description,
            phone=business.phone,
            address=business.address,
            city=business.city,
            services=[ServiceSummary(**s.to_dict()) for s in services],
            staff_members=staff_members,
            settings=BookingSettingsSchema(**business.settings_dict()),
        )
