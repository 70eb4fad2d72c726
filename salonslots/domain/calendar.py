"""
Day and week calendar grids built on top of the slot calculator.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Sequence

from .models import SlotConstraints, TimeSlot, format_minutes, minutes_of_day
from .records import Appointment
from .slot_calculator import SLOT_INTERVAL_MINUTES, SlotCalculator


@dataclass
class WeekView:
    """
    Availability grid for seven consecutive days.

    ``rows`` holds the union of all grid times of the week; ``cells`` maps
    each day to one TimeSlot per row.
    """
    days: List[date]
    rows: List[str]
    cells: Dict[date, List[TimeSlot]]

    def cell(self, day: date, slot_time: str) -> TimeSlot:
        return self.cells[day][self.rows.index(slot_time)]


class CalendarBuilder:
    """
    Merges generated availability with booked appointments for display.
    """

    def __init__(self, calculator: SlotCalculator):
        self.calculator = calculator

    def working_grid(self, day: date, constraints: SlotConstraints) -> List[str]:
        """
        Every grid cell from the working window start that begins before
        the window ends. Empty when the salon is closed.
        """
        window = self.calculator.working_window(day, constraints)
        if window is None:
            return []

        return [
            format_minutes(minute)
            for minute in range(window.start, window.end, SLOT_INTERVAL_MINUTES)
        ]

    def build_day_view(
        self,
        day: date,
        constraints: SlotConstraints,
        appointments: Sequence[Appointment],
        service_duration: Optional[int] = None
    ) -> List[TimeSlot]:
        """
        Build one TimeSlot per grid cell of a single day.

        A cell is available when it is a bookable start time for the given
        duration; the appointment starting in that cell is attached.
        """
        available = set(
            self.calculator.generate_available_time_slots(day, constraints, service_duration)
        )
        by_start = _appointments_by_start(appointments)

        return [
            TimeSlot(
                time=slot_time,
                available=slot_time in available,
                appointment=by_start.get(slot_time),
            )
            for slot_time in self.working_grid(day, constraints)
        ]

    def build_week_view(
        self,
        week_start: date,
        constraints_by_day: Mapping[date, SlotConstraints],
        appointments: Sequence[Appointment],
        service_duration: Optional[int] = None
    ) -> WeekView:
        """
        Build the availability grid for the seven days from ``week_start``.

        Days missing from ``constraints_by_day`` are shown as closed.
        Availability uses the same service duration as the day view.
        """
        days = [week_start + timedelta(days=offset) for offset in range(7)]

        day_views: Dict[date, List[TimeSlot]] = {}
        for day in days:
            constraints = constraints_by_day.get(day)
            if constraints is None:
                day_views[day] = []
                continue

            day_appointments = [a for a in appointments if a.appointment_date == day]
            day_views[day] = self.build_day_view(day, constraints, day_appointments, service_duration)

        # zero-padded labels sort chronologically
        rows = sorted({slot.time for slots in day_views.values() for slot in slots})

        cells: Dict[date, List[TimeSlot]] = {}
        for day in days:
            by_time = {slot.time: slot for slot in day_views[day]}
            cells[day] = [by_time.get(row, TimeSlot(time=row, available=False)) for row in rows]

        return WeekView(days=days, rows=rows, cells=cells)


def _appointments_by_start(appointments: Sequence[Appointment]) -> Dict[str, Appointment]:
    by_start: Dict[str, Appointment] = {}
    # appointments still holding their time win over released ones
    for appointment in sorted(appointments, key=lambda a: (a.start_time, not a.blocks_time())):
        label = format_minutes(minutes_of_day(appointment.start_time))
        by_start.setdefault(label, appointment)
    return by_start
