# booking_engine/core/exceptions.py
"""Domain errors raised by host services and mapped to HTTP responses"""


class BookingEngineError(Exception):
    """Base class for errors reported to the caller as structured reasons"""
    status_code = 500
    error = "internal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self):
        return {"error": self.error, "detail": self.detail}


class NotFoundError(BookingEngineError):
    """Referenced business, service or staff member does not exist"""
    status_code = 404
    error = "not_found"


class InvalidRequestError(BookingEngineError):
    """Missing or inconsistent request fields"""
    status_code = 400
    error = "validation_error"


class BookingStorageError(BookingEngineError):
    """The database failed for a reason other than a concurrent booking"""
    status_code = 503
    error = "storage_error"
