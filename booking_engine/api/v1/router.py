"""
API v1 router setup
Public booking routes only; authentication lives in the host application.
"""
from fastapi import APIRouter

from booking_engine.api.v1.public import availability, bookings, businesses

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(availability.router, tags=["Public"])
api_v1_router.include_router(bookings.router, tags=["Public"])
api_v1_router.include_router(businesses.router, tags=["Public"])


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "endpoints": {
            "availability": "GET /api/v1/availability",
            "bookings": "POST /api/v1/bookings",
            "businesses": "GET /api/v1/businesses/{slug}",
        }
    }
