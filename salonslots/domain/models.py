"""
Domain models for minute-of-day intervals and staff calendars.

All times are civil times in the salon's own timezone at minute resolution.
A day spans minutes ``0`` to ``1440``; intervals never cross midnight.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import FrozenSet, Iterable, Optional, Tuple

import pendulum

from .exceptions import InvalidDuration, InvalidInterval, InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(value: str) -> int:
    """
    Parse an ``HH:MM`` string into a minute of the day.

    ``24:00`` is accepted and maps to the end of the day so that a working
    day closing at midnight can be expressed.

    Raises:
        InvalidTimeFormat: If the value is not a valid clock string
    """
    match = _CLOCK_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise InvalidTimeFormat(f"Clock value out of range: {value!r}")

    return hours * 60 + minutes


def format_clock(minute: int) -> str:
    """Format a minute of the day as ``HH:MM``."""
    return f"{minute // 60:02d}:{minute % 60:02d}"


def parse_calendar_date(value: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a date.

    Raises:
        InvalidTimeFormat: If the value is not a valid calendar date
    """
    try:
        return pendulum.from_format(value.strip(), "YYYY-MM-DD").date()
    except (ValueError, AttributeError) as exc:
        raise InvalidTimeFormat(f"Expected YYYY-MM-DD, got {value!r}") from exc


@dataclass(frozen=True)
class TimeInterval:
    """
    Immutable half-open interval ``[start, end)`` in minutes of the day.

    Invariant: ``0 <= start < end <= 1440``.
    """
    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise InvalidInterval(
                f"Interval [{self.start}, {self.end}) must satisfy "
                f"0 <= start < end <= {MINUTES_PER_DAY}"
            )

    @classmethod
    def from_clock_strings(cls, start: str, duration_minutes: int) -> "TimeInterval":
        """
        Build an interval from an ``HH:MM`` start and a duration.

        Raises:
            InvalidTimeFormat: If ``start`` is malformed
            InvalidDuration: If ``duration_minutes`` is not positive
            InvalidInterval: If the interval would end after midnight
        """
        start_minute = parse_clock(start)
        return cls.from_start(start_minute, duration_minutes)

    @classmethod
    def from_start(cls, start: int, duration_minutes: int) -> "TimeInterval":
        """Build an interval from a start minute and a positive duration."""
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
            raise InvalidDuration(f"Duration must be whole minutes, got {duration_minutes!r}")
        if duration_minutes <= 0:
            raise InvalidDuration(f"Duration must be greater than zero, got {duration_minutes}")
        return cls(start=start, end=start + duration_minutes)

    @classmethod
    def from_clock_range(cls, start: str, end: str) -> "TimeInterval":
        """Build an interval from two ``HH:MM`` strings."""
        return cls(start=parse_clock(start), end=parse_clock(end))

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another."""
        return self.start < other.end and other.start < self.end

    def contains(self, inner: "TimeInterval") -> bool:
        """Check if ``inner`` lies completely within this interval."""
        return self.start <= inner.start and inner.end <= self.end

    def __str__(self) -> str:
        return f"{format_clock(self.start)}-{format_clock(self.end)}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Return True if the two half-open intervals share at least one minute."""
    return a.overlaps(b)


def contains(outer: TimeInterval, inner: TimeInterval) -> bool:
    """Return True if ``inner`` lies completely within ``outer``."""
    return outer.contains(inner)


class Weekday(IntEnum):
    """Day of the week, numbered like ``date.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return cls(day.weekday())

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday name such as ``monday`` or ``Mon``."""
        key = value.strip().upper()
        for weekday in cls:
            if weekday.name == key or weekday.name[:3] == key:
                return weekday
        raise ValueError(f"Unknown weekday: {value!r}")

    @property
    def label(self) -> str:
        return self.name.capitalize()


ALL_WEEKDAYS: FrozenSet[Weekday] = frozenset(Weekday)


@dataclass(frozen=True)
class StaffCalendarProfile:
    """
    Static weekly rules for one staff member.

    The break window is expected to lie inside the working hours; a profile
    that violates this is still accepted and reported during evaluation.
    """
    staff_id: str
    working_days: FrozenSet[Weekday]
    working_hours: TimeInterval
    break_window: Optional[TimeInterval] = None

    def works_on(self, weekday: Weekday) -> bool:
        return weekday in self.working_days

    def has_valid_break(self) -> bool:
        """Return True if there is no break or it lies within working hours."""
        return self.break_window is None or self.working_hours.contains(self.break_window)


@dataclass(frozen=True)
class BookingRecord:
    """An existing appointment as seen by the engine."""
    id: str
    staff_id: str
    date: date
    interval: TimeInterval
    status_is_blocking: bool = True


@dataclass(frozen=True)
class TimeOffRange:
    """A whole-day leave range; both dates are inclusive."""
    staff_id: str
    start_date: date
    end_date: date
    approved: bool = False

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def blocks(self, staff_id: str, day: date) -> bool:
        return self.approved and self.staff_id == staff_id and self.covers(day)


@dataclass(frozen=True)
class DaySnapshot:
    """
    Everything the evaluator needs for one staff member on one date.

    Fetched once per request and reused for every candidate of that day.
    """
    staff_id: str
    date: date
    profile: Optional[StaffCalendarProfile]
    bookings: Tuple[BookingRecord, ...] = field(default_factory=tuple)
    on_time_off: bool = False

    @property
    def weekday(self) -> Weekday:
        return Weekday.of(self.date)

    @classmethod
    def build(
        cls,
        staff_id: str,
        day: date,
        profile: Optional[StaffCalendarProfile],
        bookings: Iterable[BookingRecord],
        on_time_off: bool,
    ) -> "DaySnapshot":
        return cls(
            staff_id=staff_id,
            date=day,
            profile=profile,
            bookings=tuple(bookings),
            on_time_off=on_time_off,
        )
