from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from booking_engine.config.database import get_db
from booking_engine.schemas.business import BusinessProfileResponse
from booking_engine.services.business.business_service import BusinessService

router = APIRouter(prefix="/businesses", tags=["public-businesses"])


@router.get("/{slug}", response_model=BusinessProfileResponse)
def get_business(
        slug: str = Path(..., description="Booking link slug"),
        db: Session = Depends(get_db)
):
    """Public booking page data: services, staff and booking settings."""
    return BusinessService.get_public_profile(db, slug)
