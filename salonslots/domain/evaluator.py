"""
Availability evaluation for a single candidate interval.

This is the heart of the engine - a pure function of the staff profile,
the day's blocking bookings and the time-off flag. Every rule runs and
every triggered reason is collected, so a caller can show the complete
diagnosis at once instead of one reason per attempt.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .conflicts import (
    AvailabilityResult,
    ConflictReason,
    MisconfiguredBreak,
    NoCalendarProfile,
    OnApprovedTimeOff,
    OnBreak,
    OutsideWorkingDays,
    OutsideWorkingHours,
    Overlap,
)
from .models import BookingRecord, DaySnapshot, StaffCalendarProfile, TimeInterval, Weekday


def evaluate(
    staff: Optional[StaffCalendarProfile],
    bookings: Iterable[BookingRecord],
    time_off: bool,
    weekday: Weekday,
    candidate: TimeInterval,
    exclude_booking_id: Optional[str] = None,
) -> AvailabilityResult:
    """
    Decide whether ``candidate`` can be booked.

    Checks run in this order:
    1. Calendar profile present
    2. Working day
    3. Working hours contain the candidate
    4. Break window, plus a misconfigured break report
    5. Approved time off
    6. Overlap with each blocking booking except ``exclude_booking_id``

    Steps 2-4 need a profile and are skipped without one; 5 and 6 always run.
    """
    conflicts: List[ConflictReason] = []

    if staff is None:
        conflicts.append(NoCalendarProfile())
    else:
        conflicts.extend(_profile_conflicts(staff, weekday, candidate))

    if time_off:
        conflicts.append(OnApprovedTimeOff())

    for booking in bookings:
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if candidate.overlaps(booking.interval):
            conflicts.append(Overlap(with_booking_id=booking.id))

    return AvailabilityResult(conflicts=tuple(conflicts))


def evaluate_snapshot(
    snapshot: DaySnapshot,
    candidate: TimeInterval,
    exclude_booking_id: Optional[str] = None,
) -> AvailabilityResult:
    """Evaluate ``candidate`` against an already fetched day snapshot."""
    return evaluate(
        staff=snapshot.profile,
        bookings=snapshot.bookings,
        time_off=snapshot.on_time_off,
        weekday=snapshot.weekday,
        candidate=candidate,
        exclude_booking_id=exclude_booking_id,
    )


def _profile_conflicts(
    staff: StaffCalendarProfile,
    weekday: Weekday,
    candidate: TimeInterval,
) -> List[ConflictReason]:
    conflicts: List[ConflictReason] = []

    if not staff.works_on(weekday):
        conflicts.append(OutsideWorkingDays(day=weekday))

    if not staff.working_hours.contains(candidate):
        conflicts.append(OutsideWorkingHours(working_hours=staff.working_hours))

    if staff.break_window is not None:
        if candidate.overlaps(staff.break_window):
            conflicts.append(OnBreak(break_window=staff.break_window))
        if not staff.has_valid_break():
            conflicts.append(
                MisconfiguredBreak(
                    break_window=staff.break_window,
                    working_hours=staff.working_hours,
                )
            )

    return conflicts
