"""
Domain models for working windows and slot calculations.

Times of day enter as ``datetime.time`` and are converted once to
minutes since midnight; all window arithmetic works on those integers.
"""

from dataclasses import dataclass, field
from datetime import time
from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .records import Appointment


def parse_time_of_day(value: str) -> time:
    """
    Parse an ``HH:MM`` or ``HH:MM:SS`` string into a time object.

    Raises:
        ValueError: If the value is not a string holding a valid 24-hour time
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a time string, got {value!r}")
    return time.fromisoformat(value.strip())


def minutes_of_day(value: time) -> int:
    """Return the number of minutes since midnight."""
    return value.hour * 60 + value.minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded ``HH:MM`` string."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def span_conflicts(start: int, end: int, busy: Tuple[int, int]) -> bool:
    """
    Half-open overlap test of ``[start, end)`` against a raw busy pair.

    ``busy`` may be zero-length or inverted; the comparison is applied as is.
    """
    busy_start, busy_end = busy
    return start < busy_end and end > busy_start


@dataclass(frozen=True)
class TimeWindow:
    """
    Immutable span within a single day, in minutes since midnight.

    Intervals are half-open: ``[start, end)``.

    Invariant: start must be before end.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Start {format_minutes(self.start)} must be before end {format_minutes(self.end)}"
            )

    @classmethod
    def from_times(cls, start: time, end: time) -> "TimeWindow":
        """Build a window from two times of day."""
        return cls(start=minutes_of_day(start), end=minutes_of_day(end))

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window overlaps with another. Shared endpoints do not count."""
        return self.start < other.end and self.end > other.start

    def intersect(self, other: "TimeWindow") -> "TimeWindow | None":
        """
        Calculate the intersection of two windows.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeWindow(start=max(self.start, other.start), end=min(self.end, other.end))

    def __str__(self) -> str:
        return f"{format_minutes(self.start)} - {format_minutes(self.end)}"


@dataclass(frozen=True)
class BusinessHours:
    """
    Opening hours of a salon for one weekday.

    ``day_of_week`` runs from 0 (Sunday) to 6 (Saturday).
    """
    day_of_week: int
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    is_closed: bool = False

    def window(self) -> TimeWindow | None:
        """
        Get the opening window for the day.
        Returns None if the salon has no capacity that day.
        """
        if self.is_closed or self.open_time is None or self.close_time is None:
            return None

        if minutes_of_day(self.open_time) >= minutes_of_day(self.close_time):
            return None

        return TimeWindow.from_times(self.open_time, self.close_time)


@dataclass(frozen=True)
class StylistSchedule:
    """
    Working window of one stylist on one date, with an optional break.
    """
    start_time: time
    end_time: time
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    is_available: bool = True

    def window(self) -> TimeWindow | None:
        """Return the working window, or None if the stylist is off that day."""
        if not self.is_available:
            return None
        if minutes_of_day(self.start_time) >= minutes_of_day(self.end_time):
            return None
        return TimeWindow.from_times(self.start_time, self.end_time)

    def break_span(self) -> Tuple[int, int] | None:
        """
        Return the break as a raw ``(start, end)`` minute pair, if both ends are set.

        The pair is not validated; an inverted break still blocks any
        candidate that spans both of its ends.
        """
        if self.break_start is None or self.break_end is None:
            return None
        return minutes_of_day(self.break_start), minutes_of_day(self.break_end)


@dataclass(frozen=True)
class ExistingAppointment:
    """Occupied interval of an already booked appointment."""
    start_time: time
    end_time: time

    def span(self) -> Tuple[int, int]:
        """Return the raw ``(start, end)`` minute pair, even if zero-length."""
        return minutes_of_day(self.start_time), minutes_of_day(self.end_time)


@dataclass
class SlotConstraints:
    """
    Everything that limits bookable times on a single date.

    The caller filters ``existing_appointments`` and ``stylist_schedule``
    to the date and stylist being queried.
    """
    business_hours: List[BusinessHours]
    stylist_schedule: Optional[StylistSchedule] = None
    existing_appointments: List[ExistingAppointment] = field(default_factory=list)

    def business_hours_for(self, day_of_week: int) -> BusinessHours | None:
        """Find the business hours record for a weekday (0=Sunday)."""
        for hours in self.business_hours:
            if hours.day_of_week == day_of_week:
                return hours
        return None


@dataclass
class TimeSlot:
    """
    A bookable start time, optionally merged with the appointment
    occupying it for calendar display.
    """
    time: str
    available: bool = True
    appointment: Optional["Appointment"] = None
