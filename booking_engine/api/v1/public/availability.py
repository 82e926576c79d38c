# ============================================================================
# booking_engine/api/v1/public/availability.py
# Public slot listing - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from booking_engine.config.database import get_db
from booking_engine.schemas.booking import AvailabilityResponse, SlotResponse
from booking_engine.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["public-availability"])


@router.get("", response_model=AvailabilityResponse)
def get_availability(
        business_id: int = Query(..., description="Business to book with"),
        date: date = Query(..., description="Day to list, YYYY-MM-DD"),
        service_id: int = Query(..., description="Requested service"),
        staff_id: Optional[int] = Query(None, description="Book with this staff member"),
        party_size: int = Query(1, ge=1, description="Seats needed (capacity services)"),
        db: Session = Depends(get_db)
):
    """
    List bookable slots for a service on one day.
    Advisory only: the booking endpoint re-validates at commit time.
    """
    service, listing = AvailabilityService.get_available_slots(
        db=db,
        business_id=business_id,
        service_id=service_id,
        day=date,
        staff_id=staff_id,
        party_size=party_size,
    )

    return AvailabilityResponse(
        date=listing.date,
        service_id=service.id,
        service_name=service.name,
        duration_minutes=service.duration_minutes,
        slots=[SlotResponse(**slot.model_dump()) for slot in listing.slots],
        message=listing.message,
    )
