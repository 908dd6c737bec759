"""
Enumeration of bookable start times across a full day.

Slots cover the whole 24 hours rather than just working hours so a UI can
tell "closed" apart from "booked" and "on break".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Optional

from .conflicts import AvailabilityResult, ConflictReason, OutsideWorkingHours
from .evaluator import evaluate_snapshot
from .exceptions import InvalidDuration
from .models import MINUTES_PER_DAY, DaySnapshot, TimeInterval, format_clock

DEFAULT_STEP_MINUTES = 15


@dataclass(frozen=True)
class SlotResult:
    """One start-time option and its verdict."""
    start: int
    end: int
    is_available: bool
    first_conflict_reason: Optional[ConflictReason] = None

    @property
    def start_label(self) -> str:
        return format_clock(self.start)

    @property
    def end_label(self) -> str:
        # Slots running past midnight keep their raw end minute
        if self.end > MINUTES_PER_DAY:
            return f"{format_clock(self.end - MINUTES_PER_DAY)} (+1)"
        return format_clock(self.end)

    def to_dict(self) -> Dict[str, Any]:
        reason = self.first_conflict_reason
        return {
            "start": self.start_label,
            "end": self.end_label,
            "is_available": self.is_available,
            "first_conflict_reason": reason.to_dict() if reason else None,
        }


@dataclass(frozen=True)
class SlotSequence:
    """
    Lazy, finite and restartable sequence of slots for one staff day.

    Every iteration re-evaluates from the same snapshot, so iterating twice
    yields identical results in ascending start order.
    """
    snapshot: DaySnapshot
    duration_minutes: int
    step_minutes: int = DEFAULT_STEP_MINUTES
    available_only: bool = False
    exclude_booking_id: Optional[str] = None

    def __post_init__(self):
        _require_positive("Service duration", self.duration_minutes)
        _require_positive("Step", self.step_minutes)

    def __iter__(self) -> Iterator[SlotResult]:
        for start in range(0, MINUTES_PER_DAY, self.step_minutes):
            slot = self._evaluate_start(start)
            if self.available_only and not slot.is_available:
                continue
            yield slot

    def only_available(self) -> "SlotSequence":
        return replace(self, available_only=True)

    def first_available(self, not_before: int = 0) -> Optional[SlotResult]:
        """Return the earliest available slot starting at or after ``not_before``."""
        for slot in self.only_available():
            if slot.start >= not_before:
                return slot
        return None

    def _evaluate_start(self, start: int) -> SlotResult:
        end = start + self.duration_minutes

        if end > MINUTES_PER_DAY:
            profile = self.snapshot.profile
            reason = OutsideWorkingHours(
                working_hours=profile.working_hours if profile else None
            )
            return SlotResult(start=start, end=end, is_available=False, first_conflict_reason=reason)

        result: AvailabilityResult = evaluate_snapshot(
            self.snapshot,
            TimeInterval(start=start, end=end),
            exclude_booking_id=self.exclude_booking_id,
        )
        return SlotResult(
            start=start,
            end=end,
            is_available=result.is_available,
            first_conflict_reason=result.first_conflict,
        )


def enumerate_slots(
    snapshot: DaySnapshot,
    service_duration_minutes: int,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    exclude_booking_id: Optional[str] = None,
) -> SlotSequence:
    """Build the slot sequence for a snapshot; raises InvalidDuration eagerly."""
    return SlotSequence(
        snapshot=snapshot,
        duration_minutes=service_duration_minutes,
        step_minutes=step_minutes,
        exclude_booking_id=exclude_booking_id,
    )


def find_next_available(
    snapshot: DaySnapshot,
    service_duration_minutes: int,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    not_before: int = 0,
    exclude_booking_id: Optional[str] = None,
) -> Optional[SlotResult]:
    """Return the first available slot of the day, or None if fully blocked."""
    slots = enumerate_slots(snapshot, service_duration_minutes, step_minutes, exclude_booking_id)
    return slots.first_available(not_before=not_before)


def _require_positive(label: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDuration(f"{label} must be a positive number of minutes, got {value!r}")
