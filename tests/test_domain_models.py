"""
Tests for domain models.
"""

import pytest

from salonslots.domain.models import (
    BusinessHours,
    ExistingAppointment,
    SlotConstraints,
    StylistSchedule,
    TimeWindow,
    format_minutes,
    minutes_of_day,
    parse_time_of_day,
)
from salonslots.domain.records import AppointmentStatus

from .helpers import make_appointment, t


class TestTimeHelpers:
    """Tests for time-of-day parsing and formatting."""

    def test_parse_hours_and_minutes(self):
        assert parse_time_of_day("09:30") == t("09:30")
        assert minutes_of_day(parse_time_of_day("09:30")) == 570

    def test_parse_with_seconds(self):
        """Database time columns come back with seconds."""
        assert minutes_of_day(parse_time_of_day("18:00:00")) == 1080

    def test_parse_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_time_of_day("25:00")

    @pytest.mark.parametrize("value", [None, 900])
    def test_parse_non_string_raises_value_error(self, value):
        with pytest.raises(ValueError, match="Expected a time string"):
            parse_time_of_day(value)

    def test_format_zero_pads(self):
        assert format_minutes(545) == "09:05"
        assert format_minutes(0) == "00:00"


class TestTimeWindow:
    """Tests for TimeWindow model."""

    def test_create_valid_window(self):
        window = TimeWindow.from_times(t("09:00"), t("17:00"))

        assert window.start == 540
        assert window.end == 1020
        assert window.duration_minutes() == 480
        assert str(window) == "09:00 - 17:00"

    def test_invalid_window_raises_error(self):
        with pytest.raises(ValueError, match="must be before end"):
            TimeWindow(start=600, end=540)

    def test_overlaps(self):
        morning = TimeWindow.from_times(t("09:00"), t("12:00"))
        midday = TimeWindow.from_times(t("11:00"), t("14:00"))
        afternoon = TimeWindow.from_times(t("14:00"), t("17:00"))

        assert morning.overlaps(midday)
        assert midday.overlaps(morning)
        assert not morning.overlaps(afternoon)

    def test_touching_windows_do_not_overlap(self):
        first = TimeWindow.from_times(t("09:30"), t("10:00"))
        second = TimeWindow.from_times(t("10:00"), t("10:30"))

        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_intersect(self):
        business = TimeWindow.from_times(t("09:00"), t("18:00"))
        stylist = TimeWindow.from_times(t("10:00"), t("20:00"))

        intersection = business.intersect(stylist)

        assert intersection == TimeWindow.from_times(t("10:00"), t("18:00"))

    def test_intersect_no_overlap(self):
        business = TimeWindow.from_times(t("09:00"), t("18:00"))
        evening = TimeWindow.from_times(t("19:00"), t("20:00"))

        assert business.intersect(evening) is None


class TestBusinessHours:
    """Tests for BusinessHours model."""

    def test_open_day_window(self):
        hours = BusinessHours(day_of_week=1, open_time=t("09:30"), close_time=t("17:00"))

        assert hours.window() == TimeWindow(start=570, end=1020)

    def test_closed_flag(self):
        hours = BusinessHours(day_of_week=0, open_time=t("09:00"), close_time=t("17:00"), is_closed=True)

        assert hours.window() is None

    def test_missing_time(self):
        assert BusinessHours(day_of_week=2, open_time=t("09:00")).window() is None
        assert BusinessHours(day_of_week=2, close_time=t("17:00")).window() is None

    def test_open_not_before_close(self):
        hours = BusinessHours(day_of_week=3, open_time=t("12:00"), close_time=t("12:00"))

        assert hours.window() is None


class TestStylistSchedule:
    """Tests for StylistSchedule model."""

    def test_break_window(self):
        schedule = StylistSchedule(
            start_time=t("09:00"),
            end_time=t("17:00"),
            break_start=t("12:00"),
            break_end=t("12:30"),
        )

        assert schedule.window() == TimeWindow(start=540, end=1020)
        assert schedule.break_span() == (720, 750)

    def test_half_defined_break_is_ignored(self):
        schedule = StylistSchedule(start_time=t("09:00"), end_time=t("17:00"), break_start=t("12:00"))

        assert schedule.break_span() is None

    def test_inverted_break_is_kept_raw(self):
        schedule = StylistSchedule(
            start_time=t("09:00"),
            end_time=t("17:00"),
            break_start=t("12:30"),
            break_end=t("12:00"),
        )

        assert schedule.break_span() == (750, 720)

    def test_unavailable_stylist_has_no_window(self):
        schedule = StylistSchedule(start_time=t("09:00"), end_time=t("17:00"), is_available=False)

        assert schedule.window() is None


class TestSlotConstraints:
    """Tests for SlotConstraints lookups."""

    def test_business_hours_for_weekday(self, business_hours):
        constraints = SlotConstraints(business_hours=business_hours)

        assert constraints.business_hours_for(0).is_closed
        assert constraints.business_hours_for(1).open_time == t("09:00")

    def test_business_hours_for_missing_weekday(self):
        constraints = SlotConstraints(business_hours=[BusinessHours(day_of_week=1)])

        assert constraints.business_hours_for(5) is None
        assert constraints.existing_appointments == []


class TestAppointment:
    """Tests for Appointment records."""

    def test_as_existing(self):
        appointment = make_appointment("10:00", "10:30")

        assert appointment.as_existing() == ExistingAppointment(start_time=t("10:00"), end_time=t("10:30"))

    def test_zero_length_span(self):
        existing = ExistingAppointment(start_time=t("10:15"), end_time=t("10:15"))

        assert existing.span() == (615, 615)

    @pytest.mark.parametrize(
        "status,blocks",
        [
            (AppointmentStatus.PENDING, True),
            (AppointmentStatus.CONFIRMED, True),
            (AppointmentStatus.IN_PROGRESS, True),
            (AppointmentStatus.COMPLETED, True),
            (AppointmentStatus.CANCELLED, False),
            (AppointmentStatus.NO_SHOW, False),
        ],
    )
    def test_blocks_time(self, status, blocks):
        assert make_appointment("10:00", "10:30", status=status).blocks_time() is blocks
