"""
Booking engine: availability computation and booking-conflict resolution
for service businesses (restaurants, salons).
"""

__version__ = "0.1.0"
