# booking_engine/services/booking/locks.py
"""
Serialization of validate-then-insert per booking scope.

PostgreSQL gets transaction-scoped advisory locks, released on commit or
rollback. Other dialects fall back to process-local locks, which only
protect a single worker process.
"""
import hashlib
import threading
import weakref
from contextlib import ExitStack, contextmanager
from datetime import date
from typing import Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

# Entries vanish once no request holds or waits on the lock
_local_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_registry_lock = threading.Lock()


def booking_scope_keys(business_id: int, day: date, service_id: int, staff_id: Optional[int] = None) -> List[str]:
    """
    Keys a booking must hold, always in this order (service, then staff).

    Service-scoped capacity counts staff bookings of the same service too,
    so every booking takes the service key.
    """
    prefix = f"booking:{business_id}:{day.isoformat()}"
    keys = [f"{prefix}:service:{service_id}"]
    if staff_id is not None:
        keys.append(f"{prefix}:staff:{staff_id}")
    return keys


def advisory_lock_id(key: str) -> int:
    """Stable signed 64-bit id for pg_advisory_xact_lock"""
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


def _local_lock(key: str) -> threading.Lock:
    with _registry_lock:
        lock = _local_locks.get(key)
        if lock is None:
            lock = _local_locks[key] = threading.Lock()
        return lock


@contextmanager
def booking_scope_lock(db: Session, keys: List[str]) -> Iterator[None]:
    """Hold every key for the rest of the current transaction"""
    if db.get_bind().dialect.name == "postgresql":
        for key in keys:
            db.execute(text("SELECT pg_advisory_xact_lock(:lock_id)"), {"lock_id": advisory_lock_id(key)})
        yield
        return

    with ExitStack() as stack:
        for key in keys:
            stack.enter_context(_local_lock(key))
        yield
