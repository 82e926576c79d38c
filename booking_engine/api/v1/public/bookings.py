# ============================================================================
# booking_engine/api/v1/public/bookings.py
# Public booking commit - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from booking_engine.config.database import get_db
from booking_engine.scheduling.decisions import Reject
from booking_engine.schemas.booking import (
    BookingCreateRequest, BookingCreateResponse, BookingSummary, ErrorResponse
)
from booking_engine.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["public-bookings"])


@router.post(
    "",
    status_code=201,
    response_model=BookingCreateResponse,
    responses={409: {"model": ErrorResponse}}
)
def create_booking(
        payload: BookingCreateRequest,
        db: Session = Depends(get_db)
):
    """
    Book a slot. Returns 409 with the reason when the slot is no longer free.
    """
    result = BookingService.create_booking(db=db, request=payload)

    if isinstance(result, Reject):
        return JSONResponse(
            status_code=409,
            content={"error": result.reason.value, "detail": result.message}
        )

    return BookingCreateResponse(
        booking=BookingSummary(
            id=result.id,
            confirmation_code=result.confirmation_code,
            status=result.status,
            customer_name=result.customer_name,
            service_name=result.service.name,
            staff_name=result.staff_member.name if result.staff_member else None,
            date=result.booking_date,
            start_time=result.start_time,
            end_time=result.end_time,
            party_size=result.party_size,
            total_amount=float(result.total_amount) if result.total_amount is not None else None,
        )
    )
