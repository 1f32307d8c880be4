"""Audit week arithmetic.

Weeks run Monday to Sunday; Monday through Saturday are working days.
All dates are plain calendar dates in UTC so the result never depends on
the server's local timezone.
"""

from datetime import date, datetime, timedelta, timezone

from voxqa.schemas.selection import WeekWindow


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def default_target_date(today: date | None = None) -> date:
    """Yesterday, or the previous Saturday when today is Monday."""
    today = today or utc_today()
    if today.isoweekday() == 1:
        return today - timedelta(days=2)
    return today - timedelta(days=1)


def compute_week(reference_date: date | None = None, today: date | None = None) -> WeekWindow:
    """Compute the audit week containing reference_date.

    working_days_remaining counts the reference day through Saturday inclusive.
    A Sunday reference is treated like Saturday so the count is never zero.
    """
    ref = reference_date or default_target_date(today)
    weekday = ref.isoweekday()  # Monday=1 .. Sunday=7
    start = ref - timedelta(days=weekday - 1)
    end = start + timedelta(days=6)
    return WeekWindow(
        start=start,
        end=end,
        working_days_remaining=7 - min(weekday, 6),
    )


def pending_work_days(last_covered: date, today: date | None = None) -> list[date]:
    """Working days after last_covered up to the default target date, oldest first."""
    target = default_target_date(today)
    days: list[date] = []
    current = last_covered + timedelta(days=1)
    while current <= target:
        if current.isoweekday() != 7:
            days.append(current)
        current += timedelta(days=1)
    return days
