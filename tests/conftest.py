"""Shared test fixtures."""
import os

# Must be set before booking_engine.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SLOT_GRANULARITY_MINUTES", "15")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from booking_engine.config.database import SessionLocal, engine
from booking_engine.models import (
    AvailabilityRule, Base, Booking, Business, Service, SpecialAvailability, StaffMember
)


def upcoming(weekday: int, min_days_ahead: int = 7) -> date:
    """Next date with the given Python weekday (0=Monday), at least N days out"""
    day = date.today() + timedelta(days=min_days_ahead)
    while day.weekday() != weekday:
        day += timedelta(days=1)
    return day


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from booking_engine.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restaurant(db):
    """Restaurant open Monday 17:00-22:00 with a table for four"""
    business = Business(
        name="Bella Vista", business_type="restaurant", booking_link_slug="bella-vista",
        city="Berlin", timezone="UTC", booking_advance_days=30,
    )
    db.add(business)
    db.flush()

    table = Service(
        business_id=business.id, name="Table for 4", duration_minutes=120,
        price=0, capacity=4, requires_staff=False,
    )
    db.add(table)
    db.add(AvailabilityRule(
        business_id=business.id, day_of_week=1, start_time="17:00", end_time="22:00",
    ))
    db.commit()
    return {"business": business, "table": table}


@pytest.fixture
def salon(db):
    """Salon where Anna does every service and Klaus only men's cuts"""
    business = Business(
        name="Salon Schmidt", business_type="hair_salon", booking_link_slug="salon-schmidt",
        timezone="UTC", booking_advance_days=30,
    )
    db.add(business)
    db.flush()

    mens_cut = Service(
        business_id=business.id, name="Men's cut", duration_minutes=45, price=35,
        capacity=1, requires_staff=True, buffer_after_minutes=15,
    )
    coloring = Service(
        business_id=business.id, name="Coloring", duration_minutes=180, price=95,
        capacity=1, requires_staff=True, buffer_after_minutes=30,
    )
    anna = StaffMember(business_id=business.id, name="Anna")
    klaus = StaffMember(business_id=business.id, name="Klaus")
    anna.services = [mens_cut, coloring]
    klaus.services = [mens_cut]
    db.add_all([mens_cut, coloring, anna, klaus])
    db.flush()

    # Tuesday to Saturday, 09:00-18:00, per staff member
    for day in range(2, 7):
        for staff in (anna, klaus):
            db.add(AvailabilityRule(
                business_id=business.id, staff_member_id=staff.id,
                day_of_week=day, start_time="09:00", end_time="18:00",
            ))
    db.commit()
    return {"business": business, "mens_cut": mens_cut, "coloring": coloring, "anna": anna, "klaus": klaus}


@pytest.fixture
def add_booking(db):
    def _add(business, service, day, start, end, party_size=1, staff=None, status="confirmed"):
        booking = Booking(
            business_id=business.id, service_id=service.id,
            staff_member_id=staff.id if staff else None,
            customer_name="Existing", customer_email="existing@example.com",
            booking_date=day, start_time=start, end_time=end,
            party_size=party_size, status=status,
        )
        db.add(booking)
        db.commit()
        return booking
    return _add


@pytest.fixture
def add_closure(db):
    def _add(business, day, reason=None, staff=None, is_available=False):
        override = SpecialAvailability(
            business_id=business.id, staff_member_id=staff.id if staff else None,
            date=day, is_available=is_available, reason=reason,
        )
        db.add(override)
        db.commit()
        return override
    return _add


@pytest.fixture
def next_monday():
    return upcoming(0)


@pytest.fixture
def next_tuesday():
    return upcoming(1)
