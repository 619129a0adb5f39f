"""Unit tests for the scheduler's cron expressions."""

from datetime import datetime

import pytest

from app.utils.cron import CronSchedule


def test_monthly_default_fires_at_first_instant_of_month():
    schedule = CronSchedule.parse("0 0 0 1 * *")
    assert schedule.next_after(datetime(2025, 3, 15, 12, 0, 0)) == datetime(2025, 4, 1, 0, 0, 0)
    assert schedule.next_after(datetime(2025, 12, 31, 23, 59, 59)) == datetime(2026, 1, 1, 0, 0, 0)


def test_next_after_is_strictly_later():
    schedule = CronSchedule.parse("0 0 0 1 * *")
    assert schedule.next_after(datetime(2025, 4, 1, 0, 0, 0)) == datetime(2025, 5, 1, 0, 0, 0)


def test_seconds_come_first():
    schedule = CronSchedule.parse("30 15 2 * * *")
    assert schedule.next_after(datetime(2025, 1, 1, 3, 0, 0)) == datetime(2025, 1, 2, 2, 15, 30)


def test_steps_ranges_and_lists():
    schedule = CronSchedule.parse("*/15 0 8-10 * * 1,3,5")
    # 2025-01-04 is a Saturday; next Monday is the 6th
    assert schedule.next_after(datetime(2025, 1, 4, 12, 0, 0)) == datetime(2025, 1, 6, 8, 0, 0)
    assert schedule.next_after(datetime(2025, 1, 6, 8, 0, 0)) == datetime(2025, 1, 6, 8, 0, 15)


def test_sunday_as_seven():
    schedule = CronSchedule.parse("0 0 0 * * 7")
    # 2025-01-05 is a Sunday
    assert schedule.next_after(datetime(2025, 1, 1)) == datetime(2025, 1, 5)


def test_day_and_weekday_both_restricted_match_either():
    schedule = CronSchedule.parse("0 0 0 15 * 1")
    assert schedule.day_or
    # Monday 2025-01-06 comes before the 15th
    assert schedule.next_after(datetime(2025, 1, 1)) == datetime(2025, 1, 6)


def test_stepped_star_day_must_match_weekday_too():
    schedule = CronSchedule.parse("0 0 0 */2 * 1")
    assert not schedule.day_or
    fired = schedule.next_after(datetime(2025, 1, 1))
    # First Monday on an odd day of month
    assert fired == datetime(2025, 1, 13)
    assert fired.isoweekday() == 1


@pytest.mark.parametrize(
    "expression",
    ["", "0 0 1 * *", "0 0 0 1 * * *", "60 0 0 1 * *", "0 0 24 * * *", "0 0 0 0 * *",
     "0 0 0 1 13 *", "0 0 0 1 * 8", "a 0 0 1 * *"],
)
def test_invalid_expressions_rejected(expression):
    with pytest.raises(ValueError):
        CronSchedule.parse(expression)


def test_impossible_date_never_fires():
    with pytest.raises(ValueError):
        CronSchedule.parse("0 0 0 31 2 *").next_after(datetime(2025, 1, 1))
