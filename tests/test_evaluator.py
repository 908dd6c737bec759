"""
Tests for the availability evaluator.
"""

from salonslots.domain.conflicts import (
    MisconfiguredBreak,
    NoCalendarProfile,
    OnApprovedTimeOff,
    OnBreak,
    OutsideWorkingDays,
    OutsideWorkingHours,
    Overlap,
)
from salonslots.domain.evaluator import evaluate
from salonslots.domain.models import BookingRecord, Weekday

from conftest import MONDAY, interval, make_profile


def booking(booking_id: str, start: str, end: str) -> BookingRecord:
    return BookingRecord(
        id=booking_id,
        staff_id="anna",
        date=MONDAY,
        interval=interval(start, end),
    )


class TestEvaluate:
    """Tests for evaluate()."""

    def test_free_candidate_is_available(self):
        profile = make_profile(break_window=("12:00", "13:00"))

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("10:00", "11:00"))

        assert result.is_available
        assert result.conflicts == ()

    def test_break_precedence(self):
        """A candidate crossing into the break is on break, not outside hours."""
        profile = make_profile(break_window=("12:00", "13:00"))

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("11:30", "12:30"))

        assert result.conflicts == (OnBreak(break_window=interval("12:00", "13:00")),)

    def test_starting_when_break_ends_is_fine(self):
        profile = make_profile(break_window=("12:00", "13:00"))

        assert evaluate(profile, [], False, Weekday.MONDAY, interval("13:00", "13:30")).is_available
        assert evaluate(profile, [], False, Weekday.MONDAY, interval("11:00", "12:00")).is_available

    def test_ending_at_closing_time_is_contained(self):
        profile = make_profile()

        assert evaluate(profile, [], False, Weekday.MONDAY, interval("16:00", "17:00")).is_available

    def test_outside_working_hours(self):
        profile = make_profile()

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("16:30", "17:30"))

        assert result.conflicts == (OutsideWorkingHours(working_hours=interval("09:00", "17:00")),)

    def test_outside_working_days(self):
        profile = make_profile(days={Weekday.TUESDAY})

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("10:00", "11:00"))

        assert result.conflicts == (OutsideWorkingDays(day=Weekday.MONDAY),)

    def test_overlap_reports_every_booking(self):
        """A pre-existing double booking yields one overlap per booking."""
        profile = make_profile()
        bookings = [booking("a", "10:00", "10:30"), booking("b", "10:15", "10:45")]

        result = evaluate(profile, bookings, False, Weekday.MONDAY, interval("10:20", "10:40"))

        assert result.conflicts == (Overlap(with_booking_id="a"), Overlap(with_booking_id="b"))

    def test_touching_booking_does_not_overlap(self):
        profile = make_profile()
        bookings = [booking("a", "10:00", "10:30")]

        assert evaluate(profile, bookings, False, Weekday.MONDAY, interval("10:30", "11:00")).is_available

    def test_time_off_precedence(self):
        """Approved time off on an otherwise valid candidate is the only reason."""
        profile = make_profile()

        result = evaluate(profile, [], True, Weekday.MONDAY, interval("10:00", "11:00"))

        assert result.conflicts == (OnApprovedTimeOff(),)

    def test_excluded_booking_is_skipped(self):
        profile = make_profile()
        bookings = [booking("a", "10:00", "11:00")]
        candidate = interval("10:30", "11:30")

        assert not evaluate(profile, bookings, False, Weekday.MONDAY, candidate).is_available
        assert evaluate(profile, bookings, False, Weekday.MONDAY, candidate, exclude_booking_id="a").is_available

    def test_self_conflict_without_exclusion(self):
        profile = make_profile()
        existing = booking("a", "10:00", "11:00")

        result = evaluate(profile, [existing], False, Weekday.MONDAY, existing.interval)

        assert result.conflicts == (Overlap(with_booking_id="a"),)

    def test_no_profile_still_checks_time_off_and_overlaps(self):
        bookings = [booking("a", "10:00", "11:00")]

        result = evaluate(None, bookings, True, Weekday.MONDAY, interval("10:30", "11:30"))

        assert result.conflicts == (
            NoCalendarProfile(),
            OnApprovedTimeOff(),
            Overlap(with_booking_id="a"),
        )

    def test_all_reasons_collected_in_order(self):
        profile = make_profile(break_window=("12:00", "13:00"), days={Weekday.TUESDAY})
        bookings = [booking("a", "12:30", "13:30")]

        result = evaluate(profile, bookings, True, Weekday.MONDAY, interval("12:30", "17:30"))

        assert [type(c) for c in result.conflicts] == [
            OutsideWorkingDays,
            OutsideWorkingHours,
            OnBreak,
            OnApprovedTimeOff,
            Overlap,
        ]
        assert result.first_conflict == OutsideWorkingDays(day=Weekday.MONDAY)

    def test_misconfigured_break_is_reported(self):
        profile = make_profile(break_window=("17:00", "18:00"))

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("10:00", "11:00"))

        assert result.conflicts == (
            MisconfiguredBreak(
                break_window=interval("17:00", "18:00"),
                working_hours=interval("09:00", "17:00"),
            ),
        )

    def test_break_past_closing_still_blocks_overlapping_candidate(self):
        """A break sticking out past closing is reported and still checked."""
        profile = make_profile(break_window=("16:30", "17:30"))

        result = evaluate(profile, [], False, Weekday.MONDAY, interval("16:30", "17:00"))

        assert result.has(OnBreak)
        assert result.conflicts == (
            OnBreak(break_window=interval("16:30", "17:30")),
            MisconfiguredBreak(
                break_window=interval("16:30", "17:30"),
                working_hours=interval("09:00", "17:00"),
            ),
        )

    def test_evaluate_is_idempotent(self):
        profile = make_profile(break_window=("12:00", "13:00"))
        bookings = [booking("a", "10:00", "10:30"), booking("b", "10:15", "10:45")]
        args = (profile, bookings, False, Weekday.MONDAY, interval("10:00", "12:30"))

        first = evaluate(*args)
        second = evaluate(*args)

        assert first == second
        assert first.to_dict() == second.to_dict()


class TestConflictMessages:
    """Tests for conflict descriptions and serialisation."""

    def test_to_dict_shape(self):
        profile = make_profile(break_window=("12:00", "13:00"))
        bookings = [booking("a", "11:00", "12:00")]

        result = evaluate(profile, bookings, False, Weekday.MONDAY, interval("11:30", "12:30"))
        data = result.to_dict()

        assert data["is_available"] is False
        assert [c["code"] for c in data["conflicts"]] == ["ON_BREAK", "OVERLAP"]
        assert data["conflicts"][0]["break_window"] == "12:00-13:00"
        assert data["conflicts"][1]["booking_id"] == "a"

    def test_messages_are_readable(self):
        result = evaluate(None, [], True, Weekday.SUNDAY, interval("10:00", "11:00"))

        assert result.messages() == (
            "Staff member has no working schedule configured",
            "Staff member is on approved time off",
        )

    def test_outside_days_message(self):
        assert OutsideWorkingDays(day=Weekday.SUNDAY).describe() == "Staff member does not work on Sunday"
