from datetime import date, datetime
from zoneinfo import ZoneInfo

from center_attendance.common.datetime_utils import TimeService
from center_attendance.core.enums import AttendanceSource, RecurrenceType
from center_attendance.sessions.model import SessionDefinition
from center_attendance.sessions.resolver import ScheduleResolver

CAIRO = ZoneInfo("Africa/Cairo")
MONDAY = date(2026, 1, 5)


def _weekly(session_id=1, *, day_of_week=1, hour=10, minute=0, assistant_id=7, is_active=True):
    return SessionDefinition(
        session_id=session_id,
        center_id=1,
        assistant_id=assistant_id,
        subject="Physics",
        start_time=datetime(2025, 12, 1, hour, minute, 42, tzinfo=CAIRO),
        recurrence_type=RecurrenceType.WEEKLY,
        day_of_week=day_of_week,
        is_active=is_active,
    )


def _one_time(session_id=2, *, start, assistant_id=None):
    return SessionDefinition(
        session_id=session_id,
        center_id=1,
        assistant_id=assistant_id,
        subject="Revision",
        start_time=start,
        recurrence_type=RecurrenceType.ONE_TIME,
    )


def test_weekly_session_occurs_on_every_matching_weekday():
    resolver = ScheduleResolver(TimeService("Africa/Cairo"))
    definition = _weekly()

    for week in range(4):
        day = date(2026, 1, 5 + 7 * week)
        occurrence = resolver.occurrence_on(definition, day)
        assert occurrence is not None
        assert occurrence.civil_date == day
        assert (occurrence.start.hour, occurrence.start.minute, occurrence.start.second) == (10, 0, 0)
        assert occurrence.source == AttendanceSource.WEEKLY_SESSION


def test_weekly_session_skips_other_weekdays_and_inactive():
    resolver = ScheduleResolver(TimeService("Africa/Cairo"))

    assert resolver.occurrence_on(_weekly(), date(2026, 1, 6)) is None
    assert resolver.occurrence_on(_weekly(is_active=False), MONDAY) is None


def test_one_time_session_only_on_its_civil_date():
    resolver = ScheduleResolver(TimeService("Africa/Cairo"))
    start = datetime(2026, 1, 5, 14, 0, tzinfo=CAIRO)
    definition = _one_time(start=start)

    occurrence = resolver.occurrence_on(definition, MONDAY)

    assert occurrence is not None
    assert occurrence.start == start
    assert occurrence.source == AttendanceSource.ONE_TIME_SESSION
    assert resolver.occurrence_on(definition, date(2026, 1, 6)) is None
    assert resolver.occurrence_on(definition, date(2026, 1, 4)) is None


def test_occurrence_lasts_two_hours_and_may_cross_midnight():
    ts = TimeService("Africa/Cairo")
    resolver = ScheduleResolver(ts)

    occurrence = resolver.occurrence_on(_weekly(hour=23, minute=0), MONDAY)

    assert ts.minutes_between(occurrence.end, occurrence.start) == 120
    assert occurrence.end.date() == date(2026, 1, 6)
    assert ts.format_hhmm(occurrence.end) == "01:00:00"


def test_weekly_start_keeps_wall_clock_across_dst():
    ts = TimeService("America/New_York")
    resolver = ScheduleResolver(ts)
    definition = SessionDefinition(
        session_id=1,
        center_id=1,
        assistant_id=None,
        subject="Sunday club",
        start_time=datetime(2026, 1, 4, 10, 0, tzinfo=ZoneInfo("America/New_York")),
        recurrence_type=RecurrenceType.WEEKLY,
        day_of_week=7,
    )

    before = resolver.occurrence_on(definition, date(2026, 3, 1))
    after = resolver.occurrence_on(definition, date(2026, 3, 8))

    assert ts.format_hhmm(before.start) == ts.format_hhmm(after.start) == "10:00:00"


def test_occurrences_are_filtered_by_assistant_and_sorted_by_start():
    resolver = ScheduleResolver(TimeService("Africa/Cairo"))
    definitions = [
        _weekly(1, hour=16, assistant_id=7),
        _weekly(2, hour=9, assistant_id=None),
        _weekly(3, hour=8, assistant_id=8),
        _one_time(4, start=datetime(2026, 1, 5, 9, 0, tzinfo=CAIRO)),
    ]

    occurrences = resolver.occurrences_on_date(definitions, MONDAY, 7)

    assert [o.session_id for o in occurrences] == [2, 4, 1]
