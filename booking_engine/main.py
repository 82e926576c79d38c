"""
FastAPI application for the booking engine

Slot listing, booking commit and the public business profile
"""
import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from contextlib import asynccontextmanager

from booking_engine import __version__
from booking_engine.api.v1.router import api_v1_router
from booking_engine.config.database import create_tables
from booking_engine.config.settings import get_settings
from booking_engine.core.exceptions import BookingEngineError
from booking_engine.core.middleware import correlation_id_middleware, request_logging_middleware
from booking_engine.core.monitoring import health_router
from booking_engine.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    if settings.AUTO_CREATE_TABLES:
        create_tables()

    routes = sorted(
        (method, route.path)
        for route in app.routes if isinstance(route, APIRoute)
        for method in route.methods
    )
    logger.info(f"{settings.APP_NAME} starting up with {len(routes)} routes")
    for method, path in routes:
        logger.debug(f"  {method:8} {path}")

    yield

    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down")


async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed request fields are a plain 400"""
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "detail": "Missing or invalid fields", "errors": errors}
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Availability and booking-conflict engine for service businesses",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Add custom middleware; the last one added runs first
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.add_exception_handler(BookingEngineError, booking_engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1", tags=["api"])

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": __version__,
            "status": "running",
            "endpoints": {
                "api": "/api/v1/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "booking_engine.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
