"""
Week helpers for the capacity engine.

Weeks start on Monday. The commitment board only shows the five business
days, but a week scope for loads covers Monday through Sunday.
"""

from datetime import date, datetime, timedelta

BUSINESS_DAYS_PER_WEEK = 5
DAYS_PER_WEEK = 7


def coerce_date(value) -> date:
    """
    Turn a date, datetime, ISO ``YYYY-MM-DD`` string or ISO timestamp into a date.

    Raises:
        ValueError: If the value is none of those.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) <= 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Not a calendar day: {value!r}")


def start_of_week(day) -> date:
    """Monday of the week containing ``day``."""
    d = coerce_date(day)
    return d - timedelta(days=d.weekday())


def end_of_week(day) -> date:
    """Sunday of the week containing ``day``."""
    return start_of_week(day) + timedelta(days=DAYS_PER_WEEK - 1)


def business_days(week_start) -> list[date]:
    """The five dates Monday..Friday of ``week_start``'s week."""
    monday = start_of_week(week_start)
    return [monday + timedelta(days=i) for i in range(BUSINESS_DAYS_PER_WEEK)]


def week_of(day) -> str:
    """ISO string of the Monday of ``day``'s week (the ``week_of`` key)."""
    return start_of_week(day).isoformat()


def in_week(day, week_start) -> bool:
    """True when ``day`` falls in Monday..Sunday of ``week_start``'s week."""
    return start_of_week(week_start) <= coerce_date(day) <= end_of_week(week_start)


def current_week_start(today: date | None = None) -> date:
    return start_of_week(today or date.today())
