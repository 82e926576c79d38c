"""
Time-window arithmetic on wall-clock "HH:MM" values.

All windows are half-open [start, end): touching endpoints do not overlap.
Values are kept as minutes since midnight inside a single business day;
anything past 24:00 is rejected instead of wrapping.
"""
import re
from datetime import date
from typing import Union

from pydantic import BaseModel, ConfigDict

MINUTES_PER_DAY = 24 * 60

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight ("24:00" is end of day)."""
    match = _HHMM.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59:
        raise ValueError(f"Invalid time {value!r}: minutes out of range")

    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        raise ValueError(f"Invalid time {value!r}: past end of day")
    return total


def format_hhmm(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM"."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    """Shift an "HH:MM" value by whole minutes; never wraps past midnight."""
    return format_hhmm(parse_hhmm(value) + minutes)


def duration_between(start: str, end: str) -> int:
    return parse_hhmm(end) - parse_hhmm(start)


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    """
    The single overlap predicate.

    Works on any mutually comparable values (minutes, or zero-padded HH:MM
    strings). Intervals are half-open, so [10:00, 11:00) and [11:00, 12:00)
    do not overlap.
    """
    return start_a < end_b and end_a > start_b


def day_of_week(day: date) -> int:
    """Day index with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


class TimeWindow(BaseModel):
    """Half-open window in minutes since midnight"""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @classmethod
    def from_hhmm(cls, start: Union[str, int], end: Union[str, int]) -> "TimeWindow":
        start_minutes = parse_hhmm(start) if isinstance(start, str) else start
        end_minutes = parse_hhmm(end) if isinstance(end, str) else end
        return cls(start=start_minutes, end=end_minutes)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    @property
    def duration(self) -> int:
        return max(0, self.end - self.start)

    def overlaps(self, other: "TimeWindow") -> bool:
        return overlaps(self.start, self.end, other.start, other.end)

    def contains(self, other: "TimeWindow") -> bool:
        return other.start >= self.start and other.end <= self.end

    def padded(self, before: int = 0, after: int = 0) -> "TimeWindow":
        """Window widened by non-bookable buffer time on either side"""
        return TimeWindow(start=self.start - before, end=self.end + after)

    def to_hhmm(self) -> tuple:
        return format_hhmm(self.start), format_hhmm(self.end)
