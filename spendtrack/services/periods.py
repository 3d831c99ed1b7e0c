"""Calendar helpers shared by the services."""

import calendar
from datetime import date, timedelta


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day``."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def previous_month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month before the one containing ``day``."""
    first, _ = month_bounds(day)
    return month_bounds(first - timedelta(days=1))


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]
