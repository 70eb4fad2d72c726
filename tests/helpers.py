"""
Builders for domain objects used across the tests.
"""

from datetime import time
from typing import List

import pendulum

from salonslots.domain.models import BusinessHours, parse_time_of_day
from salonslots.domain.records import Appointment, AppointmentStatus

MONDAY = pendulum.date(2024, 11, 25)
SUNDAY = pendulum.date(2024, 11, 24)


def t(value: str) -> time:
    return parse_time_of_day(value)


def weekly_hours(open_time: str = "09:00", close_time: str = "18:00") -> List[BusinessHours]:
    """Sunday closed, Monday to Saturday open with the same hours."""
    hours = [BusinessHours(day_of_week=0, is_closed=True)]
    for day in range(1, 7):
        hours.append(BusinessHours(day_of_week=day, open_time=t(open_time), close_time=t(close_time)))
    return hours


def make_appointment(
    start: str,
    end: str,
    *,
    id: str = "apt-1",
    stylist_id: str = "st-1",
    day=MONDAY,
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
    customer_name: str = "Sarah Johnson",
) -> Appointment:
    return Appointment(
        id=id,
        salon_id="salon-1",
        customer_id="cus-1",
        stylist_id=stylist_id,
        service_id="svc-cut",
        appointment_date=day,
        start_time=t(start),
        end_time=t(end),
        status=status,
        customer_name=customer_name,
        service_name="Haircut",
    )
