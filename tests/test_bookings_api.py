"""Tests for POST /api/v1/bookings."""
import threading
from datetime import timedelta

import pytest
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError

from booking_engine.config.database import SessionLocal
from booking_engine.models import Booking
from booking_engine.scheduling.decisions import Reject
from booking_engine.schemas.booking import BookingCreateRequest
from booking_engine.services.booking.booking_service import BookingService, is_concurrent_conflict

URL = "/api/v1/bookings"


def payload(business, service, day, start, **extra):
    body = {
        "business_id": business.id,
        "service_id": service.id,
        "customer_name": "Erika Musterfrau",
        "customer_email": "erika@example.com",
        "booking_date": day.isoformat(),
        "start_time": start,
    }
    body.update(extra)
    return body


def test_creates_pending_booking(client, db, restaurant, next_monday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00",
                                             party_size=2))
    assert response.status_code == 201

    booking = response.json()["booking"]
    assert response.json()["success"] is True
    assert booking["confirmation_code"] == f"BK{booking['id']:06d}"
    assert booking["status"] == "pending"
    assert booking["service_name"] == "Table for 4"
    assert booking["staff_name"] is None
    assert booking["date"] == next_monday.isoformat()
    assert booking["start_time"] == "19:00"
    assert booking["end_time"] == "21:00"
    assert booking["party_size"] == 2
    assert booking["total_amount"] == 0.0

    assert db.query(Booking).count() == 1


def test_first_confirmation_code(client, restaurant, next_monday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "17:00"))
    assert response.json()["booking"]["confirmation_code"] == "BK000001"


def test_start_time_is_normalized(client, salon, next_tuesday):
    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, "9:30",
                                             staff_member_id=salon["anna"].id))
    assert response.status_code == 201
    assert response.json()["booking"]["start_time"] == "09:30"
    assert response.json()["booking"]["end_time"] == "10:15"
    assert response.json()["booking"]["staff_name"] == "Anna"
    assert response.json()["booking"]["total_amount"] == 35.0


def test_capacity_conflict(client, restaurant, next_monday, add_booking):
    add_booking(restaurant["business"], restaurant["table"], next_monday, "19:00", "21:00", party_size=4)

    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:30",
                                             party_size=2))
    assert response.status_code == 409
    assert response.json() == {"error": "conflict", "detail": "no capacity"}


def test_touching_booking_is_accepted(client, db, restaurant, next_monday, add_booking):
    add_booking(restaurant["business"], restaurant["table"], next_monday, "17:00", "19:00", party_size=4)
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00",
                                             party_size=4))
    assert response.status_code == 201


def test_capacity_fills_up_across_requests(client, restaurant, next_monday):
    business, table = restaurant["business"], restaurant["table"]
    assert client.post(URL, json=payload(business, table, next_monday, "19:00", party_size=3)).status_code == 201
    assert client.post(URL, json=payload(business, table, next_monday, "20:00", party_size=1)).status_code == 201

    response = client.post(URL, json=payload(business, table, next_monday, "19:30", party_size=1))
    assert response.status_code == 409
    assert response.json()["detail"] == "no capacity"


def test_cancelled_bookings_free_capacity(client, restaurant, next_monday, add_booking):
    add_booking(restaurant["business"], restaurant["table"], next_monday, "19:00", "21:00", party_size=4,
                status="cancelled")
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00",
                                             party_size=4))
    assert response.status_code == 201


def test_staff_double_booking(client, salon, next_tuesday, add_booking):
    anna = salon["anna"]
    add_booking(salon["business"], salon["mens_cut"], next_tuesday, "10:00", "10:45", staff=anna)

    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, "10:30",
                                             staff_member_id=anna.id))
    assert response.status_code == 409
    assert response.json() == {"error": "conflict", "detail": "slot already booked"}

    # Klaus is free at the same time
    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, "10:30",
                                             staff_member_id=salon["klaus"].id))
    assert response.status_code == 201


def test_outside_hours(client, restaurant, next_monday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "21:00"))
    assert response.status_code == 409
    assert response.json() == {"error": "out_of_hours", "detail": "outside business hours"}


def test_booking_past_midnight_is_out_of_hours(client, restaurant, next_monday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "23:00"))
    assert response.status_code == 409
    assert response.json()["error"] == "out_of_hours"


def test_closed_day(client, restaurant, next_tuesday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_tuesday, "19:00"))
    assert response.status_code == 409
    assert response.json() == {"error": "closed", "detail": "closed that day"}


def test_closure_override(client, restaurant, next_monday, add_closure):
    add_closure(restaurant["business"], next_monday, reason="Holiday")
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00"))
    assert response.status_code == 409
    assert response.json() == {"error": "closed", "detail": "Holiday"}


def test_past_date(client, restaurant, next_monday):
    past = next_monday - timedelta(days=28)
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], past, "19:00"))
    assert response.status_code == 409
    assert response.json()["detail"] == "date is in the past"


def test_beyond_booking_window(client, restaurant, next_monday):
    far = next_monday + timedelta(days=70)
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], far, "19:00"))
    assert response.status_code == 400


def test_missing_fields(client, restaurant, next_monday):
    body = payload(restaurant["business"], restaurant["table"], next_monday, "19:00")
    del body["customer_email"]
    response = client.post(URL, json=body)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_invalid_start_time(client, restaurant, next_monday):
    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "7pm"))
    assert response.status_code == 400


def test_staff_required(client, salon, next_tuesday):
    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, "10:00"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Staff member is required for this service"


def test_staff_must_offer_service(client, salon, next_tuesday):
    response = client.post(URL, json=payload(salon["business"], salon["coloring"], next_tuesday, "10:00",
                                             staff_member_id=salon["klaus"].id))
    assert response.status_code == 400


def test_not_found(client, restaurant, salon, next_monday):
    business, table = restaurant["business"], restaurant["table"]
    body = payload(business, table, next_monday, "19:00")

    assert client.post(URL, json={**body, "business_id": 999}).status_code == 404
    assert client.post(URL, json={**body, "service_id": 999}).status_code == 404
    assert client.post(URL, json={**body, "service_id": salon["mens_cut"].id}).status_code == 404
    assert client.post(URL, json={**body, "staff_member_id": 999}).status_code == 404


def test_phone_required_by_business(client, db, restaurant, next_monday):
    restaurant["business"].require_phone = True
    db.commit()

    body = payload(restaurant["business"], restaurant["table"], next_monday, "19:00")
    assert client.post(URL, json=body).status_code == 400
    assert client.post(URL, json={**body, "customer_phone": "+49 30 1234"}).status_code == 201


def test_listed_slot_can_be_booked_then_disappears(client, salon, next_tuesday):
    query = {
        "business_id": salon["business"].id, "service_id": salon["mens_cut"].id,
        "date": next_tuesday.isoformat(), "staff_id": salon["anna"].id,
    }
    first = client.get("/api/v1/availability", params=query).json()["slots"][0]

    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, first["start"],
                                             staff_member_id=salon["anna"].id))
    assert response.status_code == 201

    starts = [s["start"] for s in client.get("/api/v1/availability", params=query).json()["slots"]]
    assert first["start"] not in starts


def test_commit_is_retried_on_operational_error(client, db, restaurant, next_monday, monkeypatch):
    original = BookingService._validate_and_insert
    calls = []

    def flaky(*args, **kwargs):
        calls.append(1)
        if len(calls) < 3:
            raise OperationalError("INSERT INTO bookings", {}, Exception("database is locked"))
        return original(*args, **kwargs)

    monkeypatch.setattr(BookingService, "_validate_and_insert", staticmethod(flaky))

    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00"))
    assert response.status_code == 201
    assert len(calls) == 3


def test_gives_up_after_max_attempts(client, db, restaurant, next_monday, monkeypatch):
    calls = []

    def always_locked(*args, **kwargs):
        calls.append(1)
        raise OperationalError("INSERT INTO bookings", {}, Exception("database is locked"))

    monkeypatch.setattr(BookingService, "_validate_and_insert", staticmethod(always_locked))

    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00"))
    assert response.status_code == 409
    assert response.json() == {"error": "conflict", "detail": "slot already booked"}
    assert len(calls) == 3
    assert db.query(Booking).count() == 0


def test_database_outage_is_not_reported_as_conflict(client, db, restaurant, next_monday, monkeypatch):
    calls = []

    def unreachable(*args, **kwargs):
        calls.append(1)
        raise OperationalError("INSERT INTO bookings", {}, Exception("could not connect to server: Connection refused"))

    monkeypatch.setattr(BookingService, "_validate_and_insert", staticmethod(unreachable))

    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00"))
    assert response.status_code == 503
    assert response.json()["error"] == "storage_error"
    assert len(calls) == 1


class PgDriverError(Exception):
    def __init__(self, pgcode):
        super().__init__(f"SQLSTATE {pgcode}")
        self.pgcode = pgcode


@pytest.mark.parametrize("error, retried", [
    (OperationalError("INSERT", {}, PgDriverError("40001")), True),
    (OperationalError("INSERT", {}, PgDriverError("40P01")), True),
    (IntegrityError("INSERT", {}, PgDriverError("23505")), True),
    (IntegrityError("INSERT", {}, PgDriverError("23503")), False),
    (OperationalError("INSERT", {}, PgDriverError("08006")), False),
    (OperationalError("INSERT", {}, Exception("database is locked")), True),
    (IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: bookings.id")), True),
    (OperationalError("INSERT", {}, Exception("no such table: bookings")), False),
])
def test_only_concurrent_conflicts_are_retried(error, retried):
    assert is_concurrent_conflict(error) is retried


def test_concurrent_requests_never_exceed_capacity(db, restaurant, next_monday):
    business, table = restaurant["business"], restaurant["table"]
    request = BookingCreateRequest(
        business_id=business.id, service_id=table.id,
        customer_name="Racer", customer_email="racer@example.com",
        booking_date=next_monday, start_time="19:00", party_size=2,
    )

    workers = 8
    barrier = threading.Barrier(workers)
    sessions = [SessionLocal() for _ in range(workers)]
    results = []

    def book(session):
        barrier.wait()
        try:
            results.append(BookingService.create_booking(session, request))
        except Exception as e:
            results.append(e)

    threads = [threading.Thread(target=book, args=(session,)) for session in sessions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    # Closed only after every request finished
    for session in sessions:
        session.close()

    accepted = [r for r in results if isinstance(r, Booking)]
    rejected = [r for r in results if isinstance(r, Reject)]
    assert len(results) == workers
    assert len(accepted) == 2
    assert len(rejected) == 6
    assert all(r.message == "no capacity" for r in rejected)

    total = db.query(func.sum(Booking.party_size)).filter(Booking.booking_date == next_monday).scalar()
    assert total == 4


def test_inactive_service_cannot_be_booked(client, db, restaurant, next_monday):
    restaurant["table"].is_active = False
    db.commit()

    response = client.post(URL, json=payload(restaurant["business"], restaurant["table"], next_monday, "19:00"))
    assert response.status_code == 404


def test_inactive_staff_cannot_be_booked(client, db, salon, next_tuesday):
    salon["klaus"].is_active = False
    db.commit()

    response = client.post(URL, json=payload(salon["business"], salon["mens_cut"], next_tuesday, "10:00",
                                             staff_member_id=salon["klaus"].id))
    assert response.status_code == 404
