"""
Tests for the command-line interface.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from salonslots.cli.app import app

from test_adapters import SCHEDULE_YAML

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path) -> Path:
    (tmp_path / "schedule.yaml").write_text(SCHEDULE_YAML, encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text(
        "schedule_file: schedule.yaml\n"
        "defaults:\n"
        "  service_duration_minutes: 60\n"
        "  step_minutes: 30\n",
        encoding="utf-8",
    )
    return path


def invoke(*args: str):
    return runner.invoke(app, list(args))


class TestCheckCommand:
    """Tests for `salonslots check`."""

    def test_available(self, config_path):
        result = invoke("check", "anna", "2024-11-25", "11:00", "-c", str(config_path))

        assert result.exit_code == 0
        assert "Available" in result.output

    def test_conflicts_listed(self, config_path):
        result = invoke("check", "anna", "2024-11-25", "11:30", "-c", str(config_path))

        assert result.exit_code == 0
        assert "Not available" in result.output
        assert "ON_BREAK" in result.output

    def test_json_move(self, config_path):
        result = invoke(
            "check", "anna", "2024-11-25", "10:15", "--duration", "45",
            "--move", "apt-1", "--json", "-c", str(config_path),
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["command"] == "move"
        assert data["success"] is True
        assert data["end"] == "11:00"

    def test_json_new_booking_overlap(self, config_path):
        result = invoke(
            "check", "anna", "2024-11-25", "10:15", "--duration", "45",
            "--json", "-c", str(config_path),
        )

        data = json.loads(result.output)
        assert data["success"] is False
        assert [c["code"] for c in data["conflicts"]] == ["OVERLAP"]

    @pytest.mark.parametrize(
        "args",
        [
            ("anna", "2024-11-25", "25:00"),
            ("anna", "25.11.2024", "10:00"),
            ("anna", "2024-11-25", "23:30"),
            ("anna", "2024-11-25", "10:00", "--duration", "0"),
        ],
    )
    def test_caller_errors_exit_1(self, config_path, args):
        result = invoke("check", *args, "-c", str(config_path))

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_config(self, tmp_path):
        result = invoke("check", "anna", "2024-11-25", "10:00", "-c", str(tmp_path / "nope.yaml"))

        assert result.exit_code == 1


class TestSlotsCommand:
    """Tests for `salonslots slots`."""

    def test_json_available_only(self, config_path):
        result = invoke("slots", "anna", "2024-11-25", "--available-only", "--json", "-c", str(config_path))

        assert result.exit_code == 0
        starts = [slot["start"] for slot in json.loads(result.output)]
        assert starts == ["09:00", "11:00", "13:00", "15:30", "16:00"]

    def test_json_full_day(self, config_path):
        result = invoke("slots", "anna", "2024-11-25", "--step", "60", "--json", "-c", str(config_path))

        slots = json.loads(result.output)
        assert len(slots) == 24
        assert slots[0]["first_conflict_reason"]["code"] == "OUTSIDE_WORKING_HOURS"

    def test_move_frees_the_moved_appointment(self, config_path):
        result = invoke(
            "slots", "anna", "2024-11-25", "-a", "--move", "apt-2", "--json", "-c", str(config_path)
        )

        assert result.exit_code == 0
        starts = [slot["start"] for slot in json.loads(result.output)]
        assert starts == [
            "09:00", "11:00", "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
        ]

    def test_table(self, config_path):
        result = invoke("slots", "anna", "2024-11-25", "-a", "-c", str(config_path))

        assert result.exit_code == 0
        assert "09:00" in result.output


class TestNextAndListCommands:
    """Tests for `salonslots next` and `salonslots list-staff`."""

    def test_next(self, config_path):
        result = invoke("next", "anna", "2024-11-25", "--after", "10:00", "-c", str(config_path))

        assert result.exit_code == 0
        assert "11:00" in result.output

    def test_next_none_found(self, config_path):
        result = invoke("next", "anna", "2024-11-30", "-c", str(config_path))

        assert result.exit_code == 1
        assert "No free" in result.output

    def test_list_staff(self, config_path):
        result = invoke("list-staff", "-c", str(config_path))

        assert result.exit_code == 0
        assert "anna" in result.output
        assert "carla" in result.output

    def test_version(self):
        result = invoke("version")

        assert result.exit_code == 0
        assert "salonslots" in result.output


class TestRoleGate:
    """Tests for `salonslots check --as-role`."""

    def test_permitted_role(self, config_path):
        result = invoke("check", "anna", "2024-11-25", "11:00", "--as-role", "receptionist", "-c", str(config_path))

        assert result.exit_code == 0
        assert "Available" in result.output

    def test_denied_role(self, config_path):
        result = invoke(
            "check", "anna", "2024-11-25", "11:00", "--move", "apt-1",
            "--as-role", "staff", "-c", str(config_path),
        )

        assert result.exit_code == 1
        assert "not allowed" in result.output
