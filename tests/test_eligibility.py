from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from center_attendance.attendance.eligibility import EligibilityEvaluator
from center_attendance.attendance.model import AttendanceRecord
from center_attendance.common.datetime_utils import TimeService
from center_attendance.core.enums import AttendanceSource
from center_attendance.sessions.model import SessionOccurrence

CAIRO = ZoneInfo("Africa/Cairo")
START = datetime(2026, 1, 5, 10, 0, tzinfo=CAIRO)


@pytest.fixture
def occurrence():
    return SessionOccurrence(
        session_id=1,
        center_id=1,
        assistant_id=7,
        subject="Physics",
        source=AttendanceSource.WEEKLY_SESSION,
        civil_date=date(2026, 1, 5),
        start=START,
        end=START + timedelta(hours=2),
    )


@pytest.fixture
def evaluator():
    return EligibilityEvaluator(TimeService("Africa/Cairo"))


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(minutes=-31), False),
        (timedelta(minutes=-30), True),
        (timedelta(0), True),
        (timedelta(minutes=45), True),
        (timedelta(minutes=45, seconds=1), False),
        (timedelta(minutes=46), False),
    ],
)
def test_window_is_closed_interval(evaluator, occurrence, offset, expected):
    assert evaluator.within_window(occurrence, START + offset) is expected


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(minutes=5), 5),
        (timedelta(minutes=4, seconds=30), 5),
        (timedelta(minutes=4, seconds=29), 4),
        (timedelta(minutes=-20), -20),
        (timedelta(seconds=-30), 0),
    ],
)
def test_delay_rounds_half_up(evaluator, occurrence, offset, expected):
    assert evaluator.delay_minutes(occurrence, START + offset) == expected


def test_existing_record_blocks_marking(evaluator, occurrence):
    existing = AttendanceRecord(attendance_id=1, assistant_id=7, time_recorded=START, session_id=1)

    assert evaluator.can_mark(occurrence, START, None) is True
    assert evaluator.can_mark(occurrence, START, existing) is False
