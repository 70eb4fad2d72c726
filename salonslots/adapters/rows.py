"""
Conversion of raw table rows (as returned by PostgREST or the mock data
file) into domain records.
"""

from datetime import date, datetime, time
from typing import Any, Dict, Optional

import pendulum

from ..domain.models import BusinessHours, StylistSchedule, parse_time_of_day
from ..domain.records import Appointment, AppointmentStatus, Service, Stylist


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date."""
    if not isinstance(value, str):
        raise ValueError(f"Expected a date string, got {value!r}")
    parsed = pendulum.parse(value, exact=True)
    if isinstance(parsed, datetime):
        return parsed.date()
    if not isinstance(parsed, date):
        raise ValueError(f"Could not parse date: {value}")
    return parsed


def _optional_time(value: Optional[str]) -> Optional[time]:
    if not value:
        return None
    return parse_time_of_day(value)


def _nested_field(row: Dict[str, Any], key: str, field: str) -> Optional[str]:
    nested = row.get(key)
    if isinstance(nested, dict):
        return nested.get(field)
    return None


def business_hours_from_row(row: Dict[str, Any]) -> BusinessHours:
    day = int(row["day_of_week"])
    if not 0 <= day <= 6:
        raise ValueError(f"day_of_week must be between 0 and 6, got {day}")

    return BusinessHours(
        day_of_week=day,
        open_time=_optional_time(row.get("open_time")),
        close_time=_optional_time(row.get("close_time")),
        is_closed=bool(row.get("is_closed", False)),
    )


def service_from_row(row: Dict[str, Any]) -> Service:
    return Service(
        id=str(row["id"]),
        name=row["name"],
        duration_minutes=int(row["duration_minutes"]),
        price=float(row.get("price") or 0),
        category=row.get("category") or "",
        color=row.get("color") or "",
        is_active=bool(row.get("is_active", True)),
    )


def stylist_from_row(row: Dict[str, Any]) -> Stylist:
    """Stylist rows carry the display name on the embedded user record."""
    full_name = _nested_field(row, "user", "full_name") or row.get("full_name") or str(row["id"])
    return Stylist(
        id=str(row["id"]),
        full_name=full_name,
        specialties=list(row.get("specialties") or []),
        is_active=bool(row.get("is_active", True)),
    )


def stylist_schedule_from_row(row: Dict[str, Any]) -> StylistSchedule:
    return StylistSchedule(
        start_time=parse_time_of_day(row["start_time"]),
        end_time=parse_time_of_day(row["end_time"]),
        break_start=_optional_time(row.get("break_start")),
        break_end=_optional_time(row.get("break_end")),
        is_available=bool(row.get("is_available", True)),
    )


def appointment_from_row(row: Dict[str, Any]) -> Appointment:
    return Appointment(
        id=str(row["id"]),
        salon_id=str(row["salon_id"]),
        customer_id=str(row["customer_id"]),
        stylist_id=str(row["stylist_id"]),
        service_id=str(row["service_id"]),
        appointment_date=parse_date(row["appointment_date"]),
        start_time=parse_time_of_day(row["start_time"]),
        end_time=parse_time_of_day(row["end_time"]),
        status=AppointmentStatus(row.get("status") or AppointmentStatus.PENDING.value),
        total_amount=float(row.get("total_amount") or 0),
        notes=row.get("notes"),
        customer_name=_nested_field(row, "customer", "full_name"),
        service_name=_nested_field(row, "service", "name"),
    )
