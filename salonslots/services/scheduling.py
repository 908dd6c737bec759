"""
Application services for booking validation and slot listing.

The service fetches a day-scoped snapshot through collaborator protocols and
delegates every decision to the pure domain evaluator. Nothing is cached
between calls: staff settings and bookings can change between a slot listing
and the booking that follows, so each call reads fresh data.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol

from ..domain.conflicts import AvailabilityResult
from ..domain.evaluator import evaluate_snapshot
from ..domain.models import BookingRecord, DaySnapshot, StaffCalendarProfile, TimeInterval
from ..domain.results import BookingCommand, CommandResult
from ..domain.slot_enumerator import (
    DEFAULT_STEP_MINUTES,
    SlotResult,
    SlotSequence,
    enumerate_slots,
)

logger = logging.getLogger(__name__)


class StaffDirectory(Protocol):
    """Read access to staff calendar profiles."""

    def get_calendar_profile(self, staff_id: str) -> Optional[StaffCalendarProfile]:
        """Return the current profile, or None if the staff member has none."""


class AppointmentStore(Protocol):
    """Read access to existing appointments."""

    def get_blocking_bookings(self, staff_id: str, day: date) -> List[BookingRecord]:
        """Return non-cancelled bookings for the staff member on ``day``."""


class TimeOffStore(Protocol):
    """Read access to approved leave."""

    def has_approved_time_off(self, staff_id: str, day: date) -> bool:
        """Return True if approved time off covers ``day``."""


class SchedulingService:
    """
    Gate for creating and moving appointments.

    The service never writes. A caller commits the appointment to its own
    store only after a successful result, and must re-validate inside its
    own transaction if concurrent writers are possible.
    """

    def __init__(
        self,
        staff_directory: StaffDirectory,
        appointment_store: AppointmentStore,
        time_off_store: TimeOffStore,
    ) -> None:
        self._staff_directory = staff_directory
        self._appointment_store = appointment_store
        self._time_off_store = time_off_store

    def fetch_day_snapshot(self, staff_id: str, day: date) -> DaySnapshot:
        """Read profile, bookings and time off for one staff member and date."""
        profile = self._staff_directory.get_calendar_profile(staff_id)
        bookings = self._appointment_store.get_blocking_bookings(staff_id, day)
        on_time_off = self._time_off_store.has_approved_time_off(staff_id, day)

        logger.debug(
            "Fetched snapshot for %s on %s: profile=%s bookings=%d time_off=%s",
            staff_id,
            day.isoformat(),
            profile is not None,
            len(bookings),
            on_time_off,
        )

        return DaySnapshot.build(
            staff_id=staff_id,
            day=day,
            profile=profile,
            bookings=bookings,
            on_time_off=on_time_off,
        )

    def validate_new_booking(
        self,
        staff_id: str,
        day: date,
        candidate: TimeInterval,
    ) -> AvailabilityResult:
        """Check whether a new appointment fits ``candidate``."""
        snapshot = self.fetch_day_snapshot(staff_id, day)
        result = evaluate_snapshot(snapshot, candidate)
        self._log_outcome("new booking", staff_id, day, candidate, result)
        return result

    def validate_move(
        self,
        appointment_id: str,
        new_staff_id: str,
        new_date: date,
        new_candidate: TimeInterval,
    ) -> AvailabilityResult:
        """
        Check whether an existing appointment can move to a new slot.

        The appointment's own current record is ignored when it sits on the
        target staff day, so it never conflicts with itself.
        """
        snapshot = self.fetch_day_snapshot(new_staff_id, new_date)
        result = evaluate_snapshot(snapshot, new_candidate, exclude_booking_id=appointment_id)
        self._log_outcome(f"move of {appointment_id}", new_staff_id, new_date, new_candidate, result)
        return result

    def create_command(self, staff_id: str, day: date, candidate: TimeInterval) -> CommandResult:
        """Validate a new booking and wrap the outcome for the API layer."""
        result = self.validate_new_booking(staff_id, day, candidate)
        return CommandResult.from_availability(
            BookingCommand.CREATE, staff_id, day, candidate, result
        )

    def move_command(
        self,
        appointment_id: str,
        new_staff_id: str,
        new_date: date,
        new_candidate: TimeInterval,
    ) -> CommandResult:
        """Validate a move and wrap the outcome for the API layer."""
        result = self.validate_move(appointment_id, new_staff_id, new_date, new_candidate)
        return CommandResult.from_availability(
            BookingCommand.MOVE,
            new_staff_id,
            new_date,
            new_candidate,
            result,
            appointment_id=appointment_id,
        )

    def enumerate_slots(
        self,
        staff_id: str,
        day: date,
        service_duration_minutes: int,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        exclude_booking_id: Optional[str] = None,
    ) -> SlotSequence:
        """
        List every stepped start time of the day with its verdict.

        The snapshot is fetched once and shared by every slot in the sequence.
        Pass ``exclude_booking_id`` to lay out targets for moving that
        appointment, which then never blocks its own slots.
        """
        snapshot = self.fetch_day_snapshot(staff_id, day)
        return enumerate_slots(snapshot, service_duration_minutes, step_minutes, exclude_booking_id)

    def find_next_available_slot(
        self,
        staff_id: str,
        day: date,
        service_duration_minutes: int,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        not_before: int = 0,
        exclude_booking_id: Optional[str] = None,
    ) -> Optional[SlotResult]:
        """Return the earliest bookable slot of the day, or None."""
        slots = self.enumerate_slots(
            staff_id, day, service_duration_minutes, step_minutes, exclude_booking_id
        )
        return slots.first_available(not_before=not_before)

    @staticmethod
    def _log_outcome(
        action: str,
        staff_id: str,
        day: date,
        candidate: TimeInterval,
        result: AvailabilityResult,
    ) -> None:
        if result.is_available:
            logger.debug("%s for %s on %s at %s: available", action, staff_id, day, candidate)
        else:
            logger.info(
                "%s for %s on %s at %s rejected: %s",
                action,
                staff_id,
                day,
                candidate,
                ", ".join(c.code for c in result.conflicts),
            )
