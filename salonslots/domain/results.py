"""
Typed command outcomes returned to the booking API and UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .conflicts import AvailabilityResult, ConflictReason
from .models import TimeInterval, format_clock


class BookingCommand(str, Enum):
    CREATE = "create"
    MOVE = "move"

    @property
    def permission_action(self) -> str:
        """Action name checked against the appointments permission area."""
        return "create" if self is BookingCommand.CREATE else "edit"


@dataclass(frozen=True)
class CommandResult:
    """
    Success or failure of a create/move request, with every conflict found.

    A successful result means the caller may commit the appointment; the
    engine itself never writes.
    """
    command: BookingCommand
    staff_id: str
    date: date
    interval: TimeInterval
    conflicts: Tuple[ConflictReason, ...] = ()
    appointment_id: Optional[str] = None

    @property
    def success(self) -> bool:
        return not self.conflicts

    @classmethod
    def from_availability(
        cls,
        command: BookingCommand,
        staff_id: str,
        day: date,
        interval: TimeInterval,
        result: AvailabilityResult,
        appointment_id: Optional[str] = None,
    ) -> "CommandResult":
        return cls(
            command=command,
            staff_id=staff_id,
            date=day,
            interval=interval,
            conflicts=result.conflicts,
            appointment_id=appointment_id,
        )

    def messages(self) -> Tuple[str, ...]:
        return tuple(c.describe() for c in self.conflicts)

    def summary(self) -> str:
        """One line for a toast or log entry."""
        verb = "Book" if self.command is BookingCommand.CREATE else "Move"
        target = f"{self.staff_id} on {self.date.isoformat()} at {self.interval}"
        if self.success:
            return f"{verb} {target}: available"
        return f"{verb} {target}: " + "; ".join(self.messages())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command.value,
            "success": self.success,
            "appointment_id": self.appointment_id,
            "staff_id": self.staff_id,
            "date": self.date.isoformat(),
            "start": format_clock(self.interval.start),
            "end": format_clock(self.interval.end),
            "conflicts": [c.to_dict() for c in self.conflicts],
        }
