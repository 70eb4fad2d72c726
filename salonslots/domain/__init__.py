"""
Domain layer - Pure business logic without external dependencies.
"""

from .calendar import CalendarBuilder, WeekView
from .models import (
    BusinessHours,
    ExistingAppointment,
    SlotConstraints,
    StylistSchedule,
    TimeSlot,
    TimeWindow,
)
from .records import Appointment, AppointmentStatus, Service, Stylist
from .slot_calculator import (
    SlotCalculator,
    format_business_hours,
    generate_available_time_slots,
    get_next_available_slot,
    is_time_slot_available,
)

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "BusinessHours",
    "CalendarBuilder",
    "ExistingAppointment",
    "Service",
    "SlotCalculator",
    "SlotConstraints",
    "Stylist",
    "StylistSchedule",
    "TimeSlot",
    "TimeWindow",
    "WeekView",
    "format_business_hours",
    "generate_available_time_slots",
    "get_next_available_slot",
    "is_time_slot_available",
]
