"""Helper functions for service due calculations."""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from .errors import DataIntegrityError
from .rule import TimeInterval, TimeUnit


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a stored YYYY-MM-DD date.

    A time-of-day suffix ('2024-03-01T08:00:00') is accepted and dropped,
    since records are compared at day granularity.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).split("T")[0], "%Y-%m-%d").date()
    except ValueError as e:
        raise DataIntegrityError(f"Malformed date {value!r}") from e


def advance_date(basis: date, interval: TimeInterval) -> date:
    """
    Calculate next due date: basis + interval.

    Month and year steps clamp to the end of a shorter month, so
    2020-02-29 + 1 year is 2021-02-28.
    """
    if interval.unit == TimeUnit.YEAR:
        return basis + relativedelta(years=interval.amount)
    return basis + relativedelta(months=interval.amount)


def days_until(due: date, today: date) -> int:
    """Whole days from today until due; zero or negative once reached."""
    return (due - today).days


def clamp_remaining(remaining: int) -> int:
    """Remaining time/distance as reported to users: never below zero."""
    return remaining if remaining > 0 else 0
