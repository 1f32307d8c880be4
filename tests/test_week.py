"""Unit tests for audit week arithmetic."""

from datetime import date

from voxqa.engine.week import compute_week, default_target_date, pending_work_days


def test_compute_week_wednesday():
    week = compute_week(date(2026, 2, 11))
    assert week.start == date(2026, 2, 9)
    assert week.end == date(2026, 2, 15)
    assert week.working_days_remaining == 4


def test_compute_week_monday_and_saturday():
    assert compute_week(date(2026, 2, 9)).working_days_remaining == 6
    assert compute_week(date(2026, 2, 14)).working_days_remaining == 1


def test_compute_week_sunday_never_zero():
    week = compute_week(date(2026, 2, 15))
    assert week.start == date(2026, 2, 9)
    assert week.working_days_remaining == 1


def test_compute_week_across_month_boundary():
    week = compute_week(date(2026, 3, 1))  # Sunday
    assert week.start == date(2026, 2, 23)
    assert week.end == date(2026, 3, 1)


def test_default_target_date():
    # Tuesday -> Monday
    assert default_target_date(date(2026, 2, 10)) == date(2026, 2, 9)
    # Monday -> previous Saturday
    assert default_target_date(date(2026, 2, 16)) == date(2026, 2, 14)


def test_compute_week_defaults_to_target_date():
    week = compute_week(today=date(2026, 2, 16))
    assert week.start == date(2026, 2, 9)
    assert week.working_days_remaining == 1


def test_pending_work_days_skips_sunday():
    days = pending_work_days(date(2026, 2, 12), today=date(2026, 2, 17))
    assert days == [date(2026, 2, 13), date(2026, 2, 14), date(2026, 2, 16)]


def test_pending_work_days_up_to_date():
    assert pending_work_days(date(2026, 2, 16), today=date(2026, 2, 17)) == []
