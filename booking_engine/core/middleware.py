# booking_engine/core/middleware.py
"""Request correlation and access logging"""
import logging
import re
import time
import uuid
from typing import Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"

# Caller-supplied ids are echoed into headers and logs
_CORRELATION_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_correlation_id(supplied: Optional[str]) -> str:
    """Keep a well-formed caller id, otherwise mint a fresh one"""
    if supplied and _CORRELATION_ID.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex


def status_log_level(status_code: int) -> int:
    """Server errors log as ERROR, rejected requests (400/404/409) as WARNING"""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def correlation_id_middleware(request: Request, call_next):
    correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One access line per request, tagged with the correlation id"""
    started = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "-")

    response = await call_next(request)

    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.1f}"
    logger.log(
        status_log_level(response.status_code),
        f"[{correlation_id}] {request.method} {request.url.path} -> "
        f"{response.status_code} in {elapsed_ms:.1f} ms"
    )
    return response
