# booking_engine/services/scheduling/booking_window.py
"""The business's local "today" and how far ahead customers may book"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from booking_engine.config.settings import get_settings
from booking_engine.models.business import Business

logger = logging.getLogger(__name__)


def get_zone(timezone_name: Optional[str]) -> ZoneInfo:
    """Return a ZoneInfo instance, defaulting to the configured zone on failure."""
    fallback = get_settings().DEFAULT_TIMEZONE
    try:
        return ZoneInfo(timezone_name or fallback)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {timezone_name!r}, using {fallback}")
        return ZoneInfo(fallback)


def business_today(business: Business, now: Optional[datetime] = None) -> date:
    """Calendar date in the business's local timezone"""
    zone = get_zone(business.timezone)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(zone).date()


def latest_bookable_date(business: Business, today: date) -> Optional[date]:
    """Last date inside the advance-booking window, or None when unlimited"""
    if not business.booking_advance_days:
        return None
    return today + timedelta(days=business.booking_advance_days)


def is_beyond_advance_window(business: Business, day: date, today: date) -> bool:
    latest = latest_bookable_date(business, today)
    return latest is not None and day > latest
