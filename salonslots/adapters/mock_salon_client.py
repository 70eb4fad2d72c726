"""
Mock salon data client for running without a Supabase project.
"""

import json
import logging
import uuid
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum

from ..domain.exceptions import DataAccessError
from ..domain.models import BusinessHours, StylistSchedule
from ..domain.records import Appointment, AppointmentStatus, Service, Stylist
from .rows import (
    appointment_from_row,
    business_hours_from_row,
    parse_date,
    service_from_row,
    stylist_from_row,
    stylist_schedule_from_row,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_salon_data.json"


class MockSalonClient:
    """
    Mock client that serves salon tables from a JSON file.

    The file holds one list of rows per table, in the same shape the
    Supabase REST API returns. Writes only change the in-memory copy.
    """

    def __init__(self, data_file: Optional[Path] = None):
        self.data_file = data_file or DEFAULT_DATA_FILE
        self.tables = self._load_data()

    def _load_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Load the mock tables from disk."""
        if not self.data_file.exists():
            raise DataAccessError(f"Mock data file not found: {self.data_file}")

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataAccessError(f"Invalid mock data in {self.data_file}: {e}") from e

        if not isinstance(data, dict):
            raise DataAccessError("Mock data file must contain a mapping of table names to rows.")

        return data

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def get_business_hours(self, salon_id: str) -> List[BusinessHours]:
        rows = [r for r in self._rows("business_hours") if r.get("salon_id") == salon_id]
        return _parse_all(rows, business_hours_from_row)

    def get_services(self, salon_id: str) -> List[Service]:
        rows = [
            r for r in self._rows("services")
            if r.get("salon_id") == salon_id and r.get("is_active", True)
        ]
        services = _parse_all(rows, service_from_row)
        return sorted(services, key=lambda s: (s.category, s.name))

    def get_stylists(self, salon_id: str) -> List[Stylist]:
        rows = [
            r for r in self._rows("stylists")
            if r.get("salon_id") == salon_id and r.get("is_active", True)
        ]
        return _parse_all(rows, stylist_from_row)

    def get_appointments(
        self,
        salon_id: str,
        start_date: date,
        end_date: date
    ) -> List[Appointment]:
        rows = [r for r in self._rows("appointments") if r.get("salon_id") == salon_id]
        appointments = [
            a for a in _parse_all(rows, appointment_from_row)
            if start_date <= a.appointment_date <= end_date
        ]
        return sorted(appointments, key=lambda a: (a.appointment_date, a.start_time))

    def get_stylist_schedule(self, stylist_id: str, day: date) -> Optional[StylistSchedule]:
        for row in self._rows("stylist_schedules"):
            if row.get("stylist_id") != stylist_id:
                continue
            try:
                if parse_date(row["date"]) != day:
                    continue
                return stylist_schedule_from_row(row)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed stylist schedule row: %s", e)
        return None

    def create_appointment(self, data: Dict[str, Any]) -> Appointment:
        row = {"id": str(uuid.uuid4()), **data}
        try:
            appointment = appointment_from_row(row)
        except (KeyError, TypeError, ValueError) as e:
            raise DataAccessError(f"Could not store appointment: {e}") from e

        self._rows("appointments").append(row)
        return appointment

    def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        notes: Optional[str] = None
    ) -> Appointment:
        for row in self._rows("appointments"):
            if str(row.get("id")) != appointment_id:
                continue

            update: Dict[str, Any] = {"status": status}
            if notes:
                update["internal_notes"] = notes
            if status == AppointmentStatus.CANCELLED.value:
                update["cancelled_at"] = pendulum.now("UTC").to_iso8601_string()

            try:
                appointment = appointment_from_row({**row, **update})
            except (KeyError, TypeError, ValueError) as e:
                raise DataAccessError(f"Could not update appointment: {e}") from e

            row.update(update)
            return appointment

        raise DataAccessError(f"Appointment not found: {appointment_id}")


def _parse_all(rows, parser) -> list:
    parsed = []
    for row in rows:
        try:
            parsed.append(parser(row))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed row %s: %s", row.get("id", "?"), e)
    return parsed
