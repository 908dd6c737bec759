"""
YAML schedule fixture loader.

Reads staff profiles, appointments and time-off requests from a single YAML
document into an ``InMemoryScheduleStore``. Example::

    staff:
      - id: anna
        name: Anna
        working_days: [mon, tue, wed, thu, fri]
        working_hours: {start: "09:00", end: "17:00"}
        break_window: {start: "12:00", end: "13:00"}
    appointments:
      - id: apt-1
        staff_id: anna
        date: 2024-11-25
        start: "10:00"
        duration_minutes: 45
        status: confirmed
    time_off:
      - staff_id: anna
        start_date: 2024-12-23
        end_date: 2024-12-27
        status: approved
"""

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..domain.exceptions import CallerError, CollaboratorError
from ..domain.models import StaffCalendarProfile, TimeInterval, Weekday
from .memory_store import Appointment, InMemoryScheduleStore, StaffMember, TimeOffRequest

logger = logging.getLogger(__name__)


class ClockRange(BaseModel):
    """Start and end clock strings."""
    start: str
    end: str

    def to_interval(self) -> TimeInterval:
        return TimeInterval.from_clock_range(self.start, self.end)


class StaffEntry(BaseModel):
    id: str
    name: str = ""
    working_days: List[str] = Field(default_factory=lambda: [d.name.lower() for d in Weekday])
    working_hours: Optional[ClockRange] = None
    break_window: Optional[ClockRange] = None

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: List[str]) -> List[str]:
        """Ensure every entry names a weekday."""
        for day in value:
            Weekday.parse(day)
        return value

    def to_staff_member(self) -> StaffMember:
        profile = None
        if self.working_hours is not None:
            days = frozenset(Weekday.parse(d) for d in self.working_days)
            profile = StaffCalendarProfile(
                staff_id=self.id,
                working_days=days,
                working_hours=self.working_hours.to_interval(),
                break_window=self.break_window.to_interval() if self.break_window else None,
            )
        return StaffMember(staff_id=self.id, name=self.name or self.id, profile=profile)


class AppointmentEntry(BaseModel):
    id: str
    staff_id: str
    date: date
    start: str
    end: Optional[str] = None
    duration_minutes: Optional[int] = None
    status: str = "scheduled"

    @model_validator(mode="after")
    def validate_length(self) -> "AppointmentEntry":
        """Require exactly one of ``end`` or ``duration_minutes``."""
        if (self.end is None) == (self.duration_minutes is None):
            raise ValueError(f"Appointment {self.id} needs either end or duration_minutes")
        return self

    def to_appointment(self) -> Appointment:
        if self.end is not None:
            interval = TimeInterval.from_clock_range(self.start, self.end)
        else:
            interval = TimeInterval.from_clock_strings(self.start, self.duration_minutes)
        return Appointment(
            id=self.id,
            staff_id=self.staff_id,
            date=self.date,
            interval=interval,
            status=self.status,
        )


class TimeOffEntry(BaseModel):
    staff_id: str
    start_date: date
    end_date: date
    status: str = "pending"
    reason: str = ""

    @model_validator(mode="after")
    def validate_order(self) -> "TimeOffEntry":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def to_request(self) -> TimeOffRequest:
        return TimeOffRequest(
            staff_id=self.staff_id,
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status,
            reason=self.reason,
        )


class ScheduleFile(BaseModel):
    """Root document of a schedule fixture."""
    staff: List[StaffEntry] = Field(default_factory=list)
    appointments: List[AppointmentEntry] = Field(default_factory=list)
    time_off: List[TimeOffEntry] = Field(default_factory=list)

    @field_validator("staff")
    @classmethod
    def validate_unique_staff(cls, value: List[StaffEntry]) -> List[StaffEntry]:
        seen: set[str] = set()
        for entry in value:
            if entry.id in seen:
                raise ValueError(f"Duplicate staff id detected: {entry.id}")
            seen.add(entry.id)
        return value

    def to_store(self) -> InMemoryScheduleStore:
        return InMemoryScheduleStore(
            staff=[entry.to_staff_member() for entry in self.staff],
            appointments=[entry.to_appointment() for entry in self.appointments],
            time_off=[entry.to_request() for entry in self.time_off],
        )


def load_schedule_file(path: Path) -> InMemoryScheduleStore:
    """
    Load a YAML schedule fixture into an in-memory store.

    Raises:
        CollaboratorError: If the file is missing, unreadable or invalid
    """
    if not path.exists():
        raise CollaboratorError(f"Schedule file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise CollaboratorError(f"Cannot read schedule file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise CollaboratorError("Schedule file must contain a mapping at the root level.")

    try:
        store = ScheduleFile(**data).to_store()
    except (ValidationError, CallerError) as exc:
        raise CollaboratorError(f"Invalid schedule file {path}: {exc}") from exc

    logger.debug("Loaded schedule file %s with %d staff", path, len(store.list_staff()))
    return store
