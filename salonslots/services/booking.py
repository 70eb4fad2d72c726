"""
Application services for looking up availability and booking appointments.

The service fetches salon data via a data client adapter, narrows it to
one stylist and date, and delegates the availability calculation to the
domain-level ``SlotCalculator``. The data dependency is expressed as a
protocol so tests can plug in a stub.
"""

from __future__ import annotations

import logging
from datetime import date, time, timedelta
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..domain.calendar import CalendarBuilder, WeekView
from ..domain.exceptions import BookingConflictError, ServiceNotFoundError
from ..domain.models import (
    BusinessHours,
    SlotConstraints,
    StylistSchedule,
    TimeSlot,
    format_minutes,
    minutes_of_day,
)
from ..domain.records import Appointment, AppointmentStatus, Service, Stylist
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class SalonDataClientProtocol(Protocol):
    """Protocol describing the data access needed by the service."""

    def get_business_hours(self, salon_id: str) -> List[BusinessHours]:
        ...

    def get_services(self, salon_id: str) -> List[Service]:
        ...

    def get_stylists(self, salon_id: str) -> List[Stylist]:
        ...

    def get_appointments(self, salon_id: str, start_date: date, end_date: date) -> List[Appointment]:
        ...

    def get_stylist_schedule(self, stylist_id: str, day: date) -> Optional[StylistSchedule]:
        ...

    def create_appointment(self, data: Dict[str, Any]) -> Appointment:
        ...

    def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        ...


class BookingService:
    """
    Orchestrates salon data retrieval, availability and booking.
    """

    def __init__(
        self,
        data_client: SalonDataClientProtocol,
        slot_calculator: SlotCalculator,
    ) -> None:
        self._client = data_client
        self._calculator = slot_calculator
        self._calendar = CalendarBuilder(slot_calculator)

    def fetch_constraints(self, salon_id: str, day: date, stylist_id: str) -> SlotConstraints:
        """
        Build the slot constraints for one stylist on one date.
        """
        business_hours = self._client.get_business_hours(salon_id)
        appointments = self._client.get_appointments(salon_id, day, day)

        return self._constraints_for(day, stylist_id, business_hours, appointments)

    def resolve_duration(
        self,
        salon_id: str,
        *,
        service_id: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> int:
        """
        Pick the service length: explicit duration, else the service's own
        duration, else the calculator default.

        Raises:
            ServiceNotFoundError: If service_id is not an active salon service
        """
        if duration is not None:
            return duration

        if service_id is None:
            return self._calculator.default_duration_minutes

        return self.get_service(salon_id, service_id).duration_minutes

    def business_hours(self, salon_id: str) -> List[BusinessHours]:
        return self._client.get_business_hours(salon_id)

    def services(self, salon_id: str) -> List[Service]:
        return self._client.get_services(salon_id)

    def stylists(self, salon_id: str) -> List[Stylist]:
        return self._client.get_stylists(salon_id)

    def get_service(self, salon_id: str, service_id: str) -> Service:
        for service in self._client.get_services(salon_id):
            if service.id == service_id:
                return service
        raise ServiceNotFoundError(f"Unknown service: {service_id}")

    def available_slots(
        self,
        salon_id: str,
        day: date,
        stylist_id: str,
        *,
        service_id: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> List[str]:
        """Bookable start times for a stylist on a date."""
        minutes = self.resolve_duration(salon_id, service_id=service_id, duration=duration)
        constraints = self.fetch_constraints(salon_id, day, stylist_id)
        return self._calculator.generate_available_time_slots(day, constraints, minutes)

    def next_available_slot(
        self,
        salon_id: str,
        day: date,
        stylist_id: str,
        *,
        service_id: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> Optional[str]:
        minutes = self.resolve_duration(salon_id, service_id=service_id, duration=duration)
        constraints = self.fetch_constraints(salon_id, day, stylist_id)
        return self._calculator.get_next_available_slot(day, constraints, minutes)

    def day_view(
        self,
        salon_id: str,
        day: date,
        stylist_id: str,
        *,
        service_id: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> List[TimeSlot]:
        """
        Day grid for a stylist. Cancelled appointments are still shown but
        do not block availability.
        """
        minutes = self.resolve_duration(salon_id, service_id=service_id, duration=duration)
        business_hours = self._client.get_business_hours(salon_id)
        appointments = self._client.get_appointments(salon_id, day, day)

        constraints = self._constraints_for(day, stylist_id, business_hours, appointments)
        stylist_appointments = _for_stylist_on(appointments, stylist_id, day)

        return self._calendar.build_day_view(day, constraints, stylist_appointments, minutes)

    def week_view(
        self,
        salon_id: str,
        week_start: date,
        stylist_id: str,
        *,
        service_id: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> WeekView:
        """
        Week grid for a stylist, using the same service duration as the
        day view.
        """
        minutes = self.resolve_duration(salon_id, service_id=service_id, duration=duration)
        week_end = week_start + timedelta(days=6)

        business_hours = self._client.get_business_hours(salon_id)
        appointments = self._client.get_appointments(salon_id, week_start, week_end)

        constraints_by_day: Dict[date, SlotConstraints] = {}
        for offset in range(7):
            day = week_start + timedelta(days=offset)
            constraints_by_day[day] = self._constraints_for(day, stylist_id, business_hours, appointments)

        stylist_appointments = [a for a in appointments if a.stylist_id == stylist_id]

        return self._calendar.build_week_view(week_start, constraints_by_day, stylist_appointments, minutes)

    def validate_booking(
        self,
        salon_id: str,
        day: date,
        start_time: time,
        stylist_id: str,
        duration: int,
    ) -> None:
        """
        Check that a start time is bookable.

        Raises:
            BookingConflictError: If the time is not one of the generated slots
        """
        constraints = self.fetch_constraints(salon_id, day, stylist_id)

        if not self._calculator.is_time_slot_available(day, start_time, constraints, duration):
            label = format_minutes(minutes_of_day(start_time))
            raise BookingConflictError(
                f"{label} on {day.isoformat()} is not available for stylist {stylist_id}"
            )

    def create_appointment(
        self,
        salon_id: str,
        day: date,
        start_time: time,
        *,
        stylist_id: str,
        service_id: str,
        customer_id: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        """
        Validate and store a new pending appointment.

        The end time is derived from the service duration.
        """
        service = self.get_service(salon_id, service_id)
        self.validate_booking(salon_id, day, start_time, stylist_id, service.duration_minutes)

        start = minutes_of_day(start_time)
        data: Dict[str, Any] = {
            "salon_id": salon_id,
            "customer_id": customer_id,
            "stylist_id": stylist_id,
            "service_id": service.id,
            "appointment_date": day.isoformat(),
            "start_time": format_minutes(start),
            "end_time": format_minutes(start + service.duration_minutes),
            "total_amount": service.price,
            "notes": notes,
            "status": AppointmentStatus.PENDING.value,
        }

        appointment = self._client.create_appointment(data)
        logger.info(
            "Booked %s for stylist %s on %s at %s",
            service.name, stylist_id, data["appointment_date"], data["start_time"]
        )
        return appointment

    def update_appointment_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        notes: Optional[str] = None,
    ) -> Appointment:
        logger.info("Setting appointment %s to %s", appointment_id, status.value)
        return self._client.update_appointment_status(appointment_id, status.value, notes)

    def _constraints_for(
        self,
        day: date,
        stylist_id: str,
        business_hours: List[BusinessHours],
        appointments: Sequence[Appointment],
    ) -> SlotConstraints:
        occupied = [
            appointment.as_existing()
            for appointment in _for_stylist_on(appointments, stylist_id, day)
            if appointment.blocks_time()
        ]

        return SlotConstraints(
            business_hours=business_hours,
            stylist_schedule=self._client.get_stylist_schedule(stylist_id, day),
            existing_appointments=occupied,
        )


def _for_stylist_on(
    appointments: Sequence[Appointment],
    stylist_id: str,
    day: date,
) -> List[Appointment]:
    return [
        a for a in appointments
        if a.stylist_id == stylist_id and a.appointment_date == day
    ]
