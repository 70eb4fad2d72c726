"""
Core business logic for calculating available appointment start times.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from datetime import date, time
from typing import Iterable, List, Optional, Tuple

from .models import (
    BusinessHours,
    SlotConstraints,
    TimeWindow,
    format_minutes,
    minutes_of_day,
    span_conflicts,
)

SLOT_INTERVAL_MINUTES = 30
DEFAULT_SERVICE_DURATION = 60

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def day_of_week(day: date) -> int:
    """Return the weekday index with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


class SlotCalculator:
    """
    Calculates bookable start times for a service on a single date.

    Algorithm:
    1. Look up the business hours for the date's weekday
    2. Narrow them by the stylist's working window, if any
    3. Walk the window in 30-minute steps anchored at its start
    4. Stop as soon as the service no longer fits before the window ends
    5. Drop candidates overlapping booked appointments or the stylist's break
    """

    def __init__(self, default_duration_minutes: int = DEFAULT_SERVICE_DURATION):
        if default_duration_minutes <= 0:
            raise ValueError("default_duration_minutes must be greater than zero")
        self.default_duration_minutes = default_duration_minutes

    def working_window(self, day: date, constraints: SlotConstraints) -> TimeWindow | None:
        """
        Get the effective working window for a date.

        Returns None when the salon is closed, or when the stylist's
        schedule does not overlap the business hours.
        """
        hours = constraints.business_hours_for(day_of_week(day))
        if hours is None:
            return None

        window = hours.window()
        if window is None:
            return None

        schedule = constraints.stylist_schedule
        if schedule is not None:
            stylist_window = schedule.window()
            if stylist_window is None:
                return None
            # A stylist schedule can only shrink the window
            window = window.intersect(stylist_window)

        return window

    def generate_available_time_slots(
        self,
        day: date,
        constraints: SlotConstraints,
        service_duration: Optional[int] = None
    ) -> List[str]:
        """
        Generate all bookable start times for a date.

        Args:
            day: Date to generate slots for (only its weekday is used)
            constraints: Business hours, stylist schedule and booked appointments
            service_duration: Service length in minutes, defaults to 60

        Returns:
            Ascending list of ``HH:MM`` strings, empty if nothing can be booked

        Raises:
            ValueError: If service_duration is not positive
        """
        duration = self._resolve_duration(service_duration)

        window = self.working_window(day, constraints)
        if window is None:
            return []

        blocked = self._blocked_spans(constraints)

        slots: List[str] = []
        current = window.start

        while current < window.end:
            if current + duration > window.end:
                break

            if not any(span_conflicts(current, current + duration, busy) for busy in blocked):
                slots.append(format_minutes(current))

            current += SLOT_INTERVAL_MINUTES

        return slots

    def is_time_slot_available(
        self,
        day: date,
        slot_time: str | time,
        constraints: SlotConstraints,
        service_duration: Optional[int] = None
    ) -> bool:
        """Check whether ``slot_time`` is one of the generated start times."""
        if isinstance(slot_time, time):
            slot_time = format_minutes(minutes_of_day(slot_time))

        return slot_time in self.generate_available_time_slots(day, constraints, service_duration)

    def get_next_available_slot(
        self,
        day: date,
        constraints: SlotConstraints,
        service_duration: Optional[int] = None
    ) -> str | None:
        """Return the earliest bookable start time, or None."""
        slots = self.generate_available_time_slots(day, constraints, service_duration)
        return slots[0] if slots else None

    def _resolve_duration(self, service_duration: Optional[int]) -> int:
        if service_duration is None:
            return self.default_duration_minutes
        if service_duration <= 0:
            raise ValueError(f"Service duration must be positive, got {service_duration}")
        return service_duration

    @staticmethod
    def _blocked_spans(constraints: SlotConstraints) -> List[Tuple[int, int]]:
        """Collect raw appointment spans and the stylist break."""
        blocked = [appointment.span() for appointment in constraints.existing_appointments]

        if constraints.stylist_schedule is not None:
            break_span = constraints.stylist_schedule.break_span()
            if break_span is not None:
                blocked.append(break_span)

        return blocked


_default_calculator = SlotCalculator()


def generate_available_time_slots(
    day: date,
    constraints: SlotConstraints,
    service_duration: Optional[int] = None
) -> List[str]:
    """Module-level shortcut for ``SlotCalculator.generate_available_time_slots``."""
    return _default_calculator.generate_available_time_slots(day, constraints, service_duration)


def is_time_slot_available(
    day: date,
    slot_time: str | time,
    constraints: SlotConstraints,
    service_duration: Optional[int] = None
) -> bool:
    return _default_calculator.is_time_slot_available(day, slot_time, constraints, service_duration)


def get_next_available_slot(
    day: date,
    constraints: SlotConstraints,
    service_duration: Optional[int] = None
) -> str | None:
    return _default_calculator.get_next_available_slot(day, constraints, service_duration)


def format_business_hours(business_hours: Iterable[BusinessHours]) -> str:
    """
    Format weekly business hours for display.

    Example:
        Sunday: Closed
        Monday: 09:00 - 18:00
    """
    lines: List[str] = []

    for hours in sorted(business_hours, key=lambda h: h.day_of_week):
        day_name = WEEKDAY_NAMES[hours.day_of_week]
        if hours.is_closed:
            lines.append(f"{day_name}: Closed")
            continue
        lines.append(f"{day_name}: {_format_optional(hours.open_time)} - {_format_optional(hours.close_time)}")

    return "\n".join(lines)


def _format_optional(value: Optional[time]) -> str:
    if value is None:
        return "--:--"
    return format_minutes(minutes_of_day(value))
