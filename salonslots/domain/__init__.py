"""
Domain layer - Pure scheduling logic without external dependencies.
"""

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
from .evaluator import evaluate, evaluate_snapshot
from .models import (
    BookingRecord,
    DaySnapshot,
    StaffCalendarProfile,
    TimeInterval,
    TimeOffRange,
    Weekday,
    contains,
    overlaps,
)
from .results import BookingCommand, CommandResult
from .slot_enumerator import SlotResult, SlotSequence, enumerate_slots, find_next_available

__all__ = [
    "AvailabilityResult",
    "BookingCommand",
    "BookingRecord",
    "CommandResult",
    "ConflictReason",
    "DaySnapshot",
    "MisconfiguredBreak",
    "NoCalendarProfile",
    "OnApprovedTimeOff",
    "OnBreak",
    "OutsideWorkingDays",
    "OutsideWorkingHours",
    "Overlap",
    "SlotResult",
    "SlotSequence",
    "StaffCalendarProfile",
    "TimeInterval",
    "TimeOffRange",
    "Weekday",
    "contains",
    "enumerate_slots",
    "evaluate",
    "evaluate_snapshot",
    "find_next_available",
    "overlaps",
]
