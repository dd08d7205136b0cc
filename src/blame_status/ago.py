"""Calendar-aware elapsed time buckets and their humanized phrase."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_timestamp(timestamp: int | float) -> datetime:
    """Convert unix seconds into an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def years_between(now: datetime, then: datetime) -> int:
    return relativedelta(_as_utc(now), _as_utc(then)).years


def months_between(now: datetime, then: datetime) -> int:
    delta = relativedelta(_as_utc(now), _as_utc(then))
    return delta.years * 12 + delta.months


def days_between(now: datetime, then: datetime) -> int:
    return (_as_utc(now) - _as_utc(then)) // timedelta(days=1)


def hours_between(now: datetime, then: datetime) -> int:
    return (_as_utc(now) - _as_utc(then)) // timedelta(hours=1)


def minutes_between(now: datetime, then: datetime) -> int:
    return (_as_utc(now) - _as_utc(then)) // timedelta(minutes=1)


def plural_text(count: int, singular: str, plural: str) -> str:
    """Return ``"<count> <noun>"`` using the singular noun only for exactly one."""
    noun = singular if count == 1 else plural
    return f"{count} {noun}"


def to_date_text(now: datetime, then: datetime) -> str:
    """Humanize the time elapsed from ``then`` until ``now``.

    Each unit is counted on its own against the calendar, and the first
    bucket whose threshold matches wins:

    - under 5 minutes: ``"right now"``
    - under an hour: ``"<n> minutes ago"``
    - under a day: ``"<n> hour(s) ago"``
    - under 31 days: ``"<n> day(s) ago"``
    - under 12 months: ``"<n> month(s) ago"``
    - otherwise: ``"<n> year(s) ago"``
    """
    years = years_between(now, then)
    months = months_between(now, then)
    days = days_between(now, then)
    hours = hours_between(now, then)
    minutes = minutes_between(now, then)

    if minutes < 5:
        return "right now"
    if minutes < 60:
        return f"{minutes} minutes ago"
    if hours < 24:
        return plural_text(hours, "hour", "hours") + " ago"
    if days < 31:
        return plural_text(days, "day", "days") + " ago"
    if months < 12:
        return plural_text(months, "month", "months") + " ago"
    return plural_text(years, "year", "years") + " ago"
