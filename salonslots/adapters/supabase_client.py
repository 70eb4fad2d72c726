"""
Supabase (PostgREST) client for fetching and storing salon data.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, TypeVar

import pendulum
import requests

from ..domain.exceptions import DataAccessError
from ..domain.models import BusinessHours, StylistSchedule
from ..domain.records import Appointment, Service, Stylist
from .rows import (
    appointment_from_row,
    business_hours_from_row,
    service_from_row,
    stylist_from_row,
    stylist_schedule_from_row,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

APPOINTMENT_SELECT = (
    "*,customer:users!customer_id(*),"
    "stylist:stylists!stylist_id(*,user:users(*)),"
    "service:services(*)"
)


class SupabaseClient:
    """
    Client for the salon tables exposed through the Supabase REST API.

    Every request goes to ``{url}/rest/v1/<table>`` with PostgREST filter
    query parameters such as ``salon_id=eq.<id>``.
    """

    def __init__(self, url: str, api_key: str, timeout: float = 30):
        """
        Initialize the REST client.

        Args:
            url: Supabase project URL
            api_key: Project API key (anon or service role)
            timeout: Request timeout in seconds
        """
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def get_business_hours(self, salon_id: str) -> List[BusinessHours]:
        rows = self._get("business_hours", {
            "select": "*",
            "salon_id": f"eq.{salon_id}",
            "order": "day_of_week.asc",
        })
        return self._parse_rows(rows, business_hours_from_row, "business hours")

    def get_services(self, salon_id: str) -> List[Service]:
        """Active services, ordered by category then name."""
        rows = self._get("services", {
            "select": "*",
            "salon_id": f"eq.{salon_id}",
            "is_active": "eq.true",
            "order": "category.asc,name.asc",
        })
        return self._parse_rows(rows, service_from_row, "service")

    def get_stylists(self, salon_id: str) -> List[Stylist]:
        rows = self._get("stylists", {
            "select": "*,user:users(*)",
            "salon_id": f"eq.{salon_id}",
            "is_active": "eq.true",
        })
        return self._parse_rows(rows, stylist_from_row, "stylist")

    def get_appointments(
        self,
        salon_id: str,
        start_date: date,
        end_date: date
    ) -> List[Appointment]:
        """
        Get appointments for a salon within an inclusive date range.

        Args:
            salon_id: Salon identifier
            start_date: First date of the range
            end_date: Last date of the range

        Returns:
            Appointments ordered by date and start time
        """
        # PostgREST needs repeated keys for two filters on one column
        params = [
            ("select", APPOINTMENT_SELECT),
            ("salon_id", f"eq.{salon_id}"),
            ("appointment_date", f"gte.{start_date.isoformat()}"),
            ("appointment_date", f"lte.{end_date.isoformat()}"),
            ("order", "appointment_date.asc,start_time.asc"),
        ]
        rows = self._get("appointments", params)
        return self._parse_rows(rows, appointment_from_row, "appointment")

    def get_stylist_schedule(self, stylist_id: str, day: date) -> Optional[StylistSchedule]:
        """Return the stylist's schedule override for a date, if any."""
        rows = self._get("stylist_schedules", {
            "select": "*",
            "stylist_id": f"eq.{stylist_id}",
            "date": f"eq.{day.isoformat()}",
            "limit": "1",
        })
        schedules = self._parse_rows(rows, stylist_schedule_from_row, "stylist schedule")
        return schedules[0] if schedules else None

    def create_appointment(self, data: Dict[str, Any]) -> Appointment:
        """Insert an appointment and return the stored record."""
        rows = self._request(
            "POST",
            "appointments",
            params={"select": APPOINTMENT_SELECT},
            json=data,
            headers={"Prefer": "return=representation"},
        )
        return self._single(rows, "appointment")

    def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        notes: Optional[str] = None
    ) -> Appointment:
        """
        Update the status of an appointment.

        Cancellations also record ``cancelled_at``; notes go to the
        internal notes column.
        """
        update: Dict[str, Any] = {"status": status}
        if notes:
            update["internal_notes"] = notes
        if status == "cancelled":
            update["cancelled_at"] = pendulum.now("UTC").to_iso8601_string()

        rows = self._request(
            "PATCH",
            "appointments",
            params={"id": f"eq.{appointment_id}", "select": APPOINTMENT_SELECT},
            json=update,
            headers={"Prefer": "return=representation"},
        )
        return self._single(rows, "appointment")

    def _get(self, table: str, params: Any) -> List[Dict[str, Any]]:
        return self._request("GET", table, params=params)

    def _request(
        self,
        method: str,
        table: str,
        params: Any = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{table}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise DataAccessError(f"Request to {table} failed: {e}") from e
        except ValueError as e:
            raise DataAccessError(f"Invalid JSON from {table}: {e}") from e

        if not isinstance(data, list):
            raise DataAccessError(f"Unexpected response from {table}: expected a list of rows")

        return data

    def _single(self, rows: List[Dict[str, Any]], kind: str) -> Appointment:
        if not rows:
            raise DataAccessError(f"No {kind} returned")
        try:
            return appointment_from_row(rows[0])
        except (KeyError, TypeError, ValueError) as e:
            raise DataAccessError(f"Could not parse {kind}: {e}") from e

    @staticmethod
    def _parse_rows(
        rows: List[Dict[str, Any]],
        parser: Callable[[Dict[str, Any]], T],
        kind: str
    ) -> List[T]:
        parsed: List[T] = []

        for row in rows:
            try:
                parsed.append(parser(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed %s row: %s", kind, e)
                continue

        return parsed
