"""
Shared fixtures for scheduling tests.
"""

from datetime import date

import pytest

from salonslots.adapters.memory_store import Appointment, InMemoryScheduleStore, StaffMember, TimeOffRequest
from salonslots.domain.models import ALL_WEEKDAYS, StaffCalendarProfile, TimeInterval, Weekday
from salonslots.services.scheduling import SchedulingService

MONDAY = date(2024, 11, 25)
SATURDAY = date(2024, 11, 30)


def interval(start: str, end: str) -> TimeInterval:
    return TimeInterval.from_clock_range(start, end)


def make_profile(
    staff_id: str = "anna",
    hours: tuple = ("09:00", "17:00"),
    break_window: tuple | None = None,
    days=ALL_WEEKDAYS,
) -> StaffCalendarProfile:
    return StaffCalendarProfile(
        staff_id=staff_id,
        working_days=frozenset(days),
        working_hours=interval(*hours),
        break_window=interval(*break_window) if break_window else None,
    )


@pytest.fixture
def weekday_profile() -> StaffCalendarProfile:
    """Anna works Monday to Friday, 09:00-17:00, break 12:00-13:00."""
    return make_profile(
        break_window=("12:00", "13:00"),
        days={Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY},
    )


@pytest.fixture
def store(weekday_profile) -> InMemoryScheduleStore:
    return InMemoryScheduleStore(
        staff=[
            StaffMember(staff_id="anna", name="Anna", profile=weekday_profile),
            StaffMember(staff_id="ben", name="Ben", profile=make_profile("ben", hours=("10:00", "19:00"))),
            StaffMember(staff_id="carla", name="Carla", profile=None),
        ],
        appointments=[
            Appointment(id="apt-1", staff_id="anna", date=MONDAY, interval=interval("10:00", "10:45"), status="confirmed"),
            Appointment(id="apt-2", staff_id="anna", date=MONDAY, interval=interval("14:00", "15:30")),
            Appointment(id="apt-3", staff_id="anna", date=MONDAY, interval=interval("15:30", "16:00"), status="Cancelled"),
            Appointment(id="apt-4", staff_id="ben", date=MONDAY, interval=interval("11:00", "12:00"), status="no-show"),
        ],
        time_off=[
            TimeOffRequest(staff_id="ben", start_date=date(2024, 11, 26), end_date=date(2024, 11, 28), status="approved"),
            TimeOffRequest(staff_id="anna", start_date=date(2024, 11, 29), end_date=date(2024, 11, 29), status="pending"),
        ],
    )


@pytest.fixture
def service(store) -> SchedulingService:
    return SchedulingService(staff_directory=store, appointment_store=store, time_off_store=store)
