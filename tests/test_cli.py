"""
Tests for the command line interface, run against the bundled mock data.
"""

import pytest
from typer.testing import CliRunner

from salonslots.cli.app import app

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("salon_id: salon-1\nlog_level: ERROR\n", encoding="utf-8")
    return str(path)


def invoke(*args):
    return runner.invoke(app, list(args))


class TestSlotsCommand:
    """Tests for `salonslots slots`."""

    def test_lists_available_times(self, config_path):
        result = invoke("slots", "2024-11-25", "--stylist", "st-1", "--duration", "30", "--config", config_path, "--mock")

        assert result.exit_code == 0
        assert "11 bookable time(s)" in result.output
        assert "  09:00" in result.output
        assert "  10:00" not in result.output  # booked
        assert "  12:00" not in result.output  # break
        assert "  15:00" in result.output  # cancelled appointment

    def test_service_duration(self, config_path):
        result = invoke("slots", "2024-11-25", "-s", "st-1", "--service", "svc-color", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "  14:30" in result.output
        assert "  15:30" in result.output
        assert "  16:00" not in result.output

    def test_closed_day(self, config_path):
        result = invoke("slots", "2024-11-24", "-s", "st-1", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "No bookable times" in result.output

    def test_unknown_service(self, config_path):
        result = invoke("slots", "2024-11-25", "-s", "st-1", "--service", "svc-nope", "-c", config_path, "--mock")

        assert result.exit_code == 1
        assert "Unknown service" in result.output

    def test_invalid_date(self, config_path):
        result = invoke("slots", "25.11.2024", "-s", "st-1", "-c", config_path, "--mock")

        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_missing_config(self, tmp_path):
        result = invoke("slots", "2024-11-25", "-s", "st-1", "-c", str(tmp_path / "missing.yaml"), "--mock")

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_remote_backend_requires_settings(self, config_path, monkeypatch):
        monkeypatch.delenv("SALONSLOTS_SUPABASE_KEY", raising=False)

        result = invoke("slots", "2024-11-25", "-s", "st-1", "-c", config_path)

        assert result.exit_code == 1
        assert "supabase_url" in result.output


class TestOtherCommands:
    """Tests for next, day, week, hours and book."""

    def test_next(self, config_path):
        result = invoke("next", "2024-11-25", "-s", "st-2", "-d", "60", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Next available: 10:00" in result.output

    def test_next_when_stylist_is_off(self, config_path):
        result = invoke("next", "2024-11-26", "-s", "st-2", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "No bookable times on 2024-11-26" in result.output

    def test_day(self, config_path):
        result = invoke("day", "2024-11-25", "-s", "st-1", "-d", "30", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Sarah Johnson" in result.output
        assert "Available slots: 11" in result.output

    def test_week(self, config_path):
        result = invoke("week", "2024-11-27", "-s", "st-1", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Week of November 25, 2024" in result.output
        assert "Emily" in result.output

    def test_hours(self, config_path):
        result = invoke("hours", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Sunday: Closed" in result.output
        assert "Monday: 09:00 - 18:00" in result.output
        assert "Saturday: 10:00 - 16:00" in result.output

    def test_book_free_slot(self, config_path):
        result = invoke(
            "book", "2024-11-25", "11:00",
            "-s", "st-1", "--service", "svc-cut", "--customer", "cus-9",
            "-c", config_path, "--mock",
        )

        assert result.exit_code == 0
        assert "Booked 2024-11-25 11:00-11:30 (pending)" in result.output

    def test_book_conflict(self, config_path):
        result = invoke(
            "book", "2024-11-25", "10:00",
            "-s", "st-1", "--service", "svc-cut", "--customer", "cus-9",
            "-c", config_path, "--mock",
        )

        assert result.exit_code == 1
        assert "Not available" in result.output

    def test_stylists(self, config_path):
        result = invoke("stylists", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Alice Moreau" in result.output
        assert "st-2" in result.output

    def test_services(self, config_path):
        result = invoke("services", "-c", config_path, "--mock")

        assert result.exit_code == 0
        assert "Haircut" in result.output
        assert "$120.00" in result.output
        assert "Perm" not in result.output

    def test_version(self):
        result = invoke("version")

        assert result.exit_code == 0
        assert "salonslots" in result.output
