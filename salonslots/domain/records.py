"""
Salon records supplied by the data layer.
"""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import List, Optional

from .models import ExistingAppointment


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Statuses whose appointments no longer occupy the stylist's time
RELEASED_STATUSES = frozenset({AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW})


@dataclass(frozen=True)
class Service:
    """A bookable salon service."""
    id: str
    name: str
    duration_minutes: int
    price: float = 0.0
    category: str = ""
    color: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class Stylist:
    """A stylist working at the salon."""
    id: str
    full_name: str
    specialties: List[str] = field(default_factory=list)
    is_active: bool = True


@dataclass
class Appointment:
    """
    A booked appointment as stored by the data layer.
    """
    id: str
    salon_id: str
    customer_id: str
    stylist_id: str
    service_id: str
    appointment_date: date
    start_time: time
    end_time: time
    status: AppointmentStatus = AppointmentStatus.PENDING
    total_amount: float = 0.0
    notes: Optional[str] = None
    customer_name: Optional[str] = None
    service_name: Optional[str] = None

    def blocks_time(self) -> bool:
        """Check whether the appointment still occupies its interval."""
        return self.status not in RELEASED_STATUSES

    def as_existing(self) -> ExistingAppointment:
        """Project to the occupied interval used by the slot calculator."""
        return ExistingAppointment(start_time=self.start_time, end_time=self.end_time)
