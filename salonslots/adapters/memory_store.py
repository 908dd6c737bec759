"""
In-memory schedule store implementing every collaborator protocol.

Used by the CLI (fed from a YAML schedule file) and by tests. Appointment
statuses are reduced to a single ``status_is_blocking`` flag here, at the
store boundary, so nothing downstream re-derives it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..domain.models import BookingRecord, StaffCalendarProfile, TimeInterval, TimeOffRange

NON_BLOCKING_STATUSES = frozenset({"cancelled", "canceled", "no_show"})
APPROVED_TIME_OFF_STATUS = "approved"


def normalize_status(status: str) -> str:
    """Lower-case a status and unify separators (``No-Show`` -> ``no_show``)."""
    return status.strip().lower().replace("-", "_").replace(" ", "_")


def is_blocking_status(status: str) -> bool:
    return normalize_status(status) not in NON_BLOCKING_STATUSES


@dataclass(frozen=True)
class StaffMember:
    """Directory entry; ``profile`` is None when no schedule is configured."""
    staff_id: str
    name: str = ""
    profile: Optional[StaffCalendarProfile] = None


@dataclass(frozen=True)
class Appointment:
    """Appointment row as stored, before status normalisation."""
    id: str
    staff_id: str
    date: date
    interval: TimeInterval
    status: str = "scheduled"

    def to_booking_record(self) -> BookingRecord:
        return BookingRecord(
            id=self.id,
            staff_id=self.staff_id,
            date=self.date,
            interval=self.interval,
            status_is_blocking=is_blocking_status(self.status),
        )


@dataclass(frozen=True)
class TimeOffRequest:
    """Leave request as stored; only approved requests block."""
    staff_id: str
    start_date: date
    end_date: date
    status: str = "pending"
    reason: str = ""

    def to_range(self) -> TimeOffRange:
        return TimeOffRange(
            staff_id=self.staff_id,
            start_date=self.start_date,
            end_date=self.end_date,
            approved=normalize_status(self.status) == APPROVED_TIME_OFF_STATUS,
        )


class InMemoryScheduleStore:
    """
    Staff directory, appointment store and time-off store over plain lists.
    """

    def __init__(
        self,
        staff: Iterable[StaffMember] = (),
        appointments: Iterable[Appointment] = (),
        time_off: Iterable[TimeOffRequest] = (),
    ) -> None:
        self._staff: Dict[str, StaffMember] = {}
        self._appointments: List[Appointment] = []
        self._time_off: List[TimeOffRequest] = []

        for member in staff:
            self.add_staff(member)
        for appointment in appointments:
            self.add_appointment(appointment)
        for request in time_off:
            self.add_time_off(request)

    def add_staff(self, member: StaffMember) -> None:
        self._staff[member.staff_id] = member

    def add_appointment(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)

    def add_time_off(self, request: TimeOffRequest) -> None:
        self._time_off.append(request)

    def list_staff(self) -> List[StaffMember]:
        return sorted(self._staff.values(), key=lambda m: m.staff_id)

    def get_staff(self, staff_id: str) -> Optional[StaffMember]:
        return self._staff.get(staff_id)

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    # StaffDirectory

    def get_calendar_profile(self, staff_id: str) -> Optional[StaffCalendarProfile]:
        member = self._staff.get(staff_id)
        return member.profile if member else None

    # AppointmentStore

    def get_blocking_bookings(self, staff_id: str, day: date) -> List[BookingRecord]:
        records = [
            appointment.to_booking_record()
            for appointment in self._appointments
            if appointment.staff_id == staff_id and appointment.date == day
        ]
        return sorted(
            (r for r in records if r.status_is_blocking),
            key=lambda r: (r.interval.start, r.id),
        )

    # TimeOffStore

    def has_approved_time_off(self, staff_id: str, day: date) -> bool:
        return any(request.to_range().blocks(staff_id, day) for request in self._time_off)
