"""
Conflict reasons and availability results.

Each reason is an immutable value carrying enough data to render a message
for a receptionist. A result lists every reason that applies, in the order
the checks ran.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

from .models import TimeInterval, Weekday


@dataclass(frozen=True)
class ConflictReason:
    """Base class for a single cause of unavailability."""
    code: ClassVar[str] = "CONFLICT"

    def describe(self) -> str:
        return "Unavailable"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.describe()}


@dataclass(frozen=True)
class NoCalendarProfile(ConflictReason):
    code: ClassVar[str] = "NO_CALENDAR_PROFILE"

    def describe(self) -> str:
        return "Staff member has no working schedule configured"


@dataclass(frozen=True)
class OutsideWorkingDays(ConflictReason):
    day: Weekday
    code: ClassVar[str] = "OUTSIDE_WORKING_DAYS"

    def describe(self) -> str:
        return f"Staff member does not work on {self.day.label}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["day"] = self.day.name.lower()
        return data


@dataclass(frozen=True)
class OutsideWorkingHours(ConflictReason):
    # None when the synthetic past-midnight reason is produced without a profile
    working_hours: Optional[TimeInterval] = None
    code: ClassVar[str] = "OUTSIDE_WORKING_HOURS"

    def describe(self) -> str:
        if self.working_hours is None:
            return "Outside working hours"
        return f"Outside working hours ({self.working_hours})"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["working_hours"] = str(self.working_hours) if self.working_hours else None
        return data


@dataclass(frozen=True)
class OnBreak(ConflictReason):
    break_window: TimeInterval
    code: ClassVar[str] = "ON_BREAK"

    def describe(self) -> str:
        return f"Overlaps the break ({self.break_window})"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["break_window"] = str(self.break_window)
        return data


@dataclass(frozen=True)
class MisconfiguredBreak(ConflictReason):
    """The profile's break window does not lie within its working hours."""
    break_window: TimeInterval
    working_hours: TimeInterval
    code: ClassVar[str] = "MISCONFIGURED_BREAK"

    def describe(self) -> str:
        return (
            f"Break window {self.break_window} lies outside "
            f"working hours {self.working_hours}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["break_window"] = str(self.break_window)
        data["working_hours"] = str(self.working_hours)
        return data


@dataclass(frozen=True)
class OnApprovedTimeOff(ConflictReason):
    code: ClassVar[str] = "ON_APPROVED_TIME_OFF"

    def describe(self) -> str:
        return "Staff member is on approved time off"


@dataclass(frozen=True)
class Overlap(ConflictReason):
    with_booking_id: str
    code: ClassVar[str] = "OVERLAP"

    def describe(self) -> str:
        return f"Overlaps existing appointment {self.with_booking_id}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["booking_id"] = self.with_booking_id
        return data


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of evaluating one candidate interval."""
    conflicts: Tuple[ConflictReason, ...] = ()

    @property
    def is_available(self) -> bool:
        return not self.conflicts

    @property
    def first_conflict(self) -> Optional[ConflictReason]:
        return self.conflicts[0] if self.conflicts else None

    def has(self, reason_type: type) -> bool:
        """Check whether any conflict is of the given reason type."""
        return any(isinstance(c, reason_type) for c in self.conflicts)

    def messages(self) -> Tuple[str, ...]:
        return tuple(c.describe() for c in self.conflicts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_available": self.is_available,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }
