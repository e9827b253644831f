"""Calendar arithmetic over activities.

Everything here is pure: functions take any objects exposing naive
``start_at``/``end_at`` datetimes (ORM rows or schemas) and never touch the
database. Day and month boundaries are wall-clock boundaries in the
configured timezone.
"""

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Protocol, TypeVar

from calendlyx.core.timeutils import local_now

CURRENT = "current"
UPCOMING = "upcoming"
PAST = "past"


class Timed(Protocol):
    start_at: datetime
    end_at: datetime


T = TypeVar("T", bound=Timed)


@dataclass(slots=True)
class CategorizedActivities:
    current: list = field(default_factory=list)
    upcoming: list = field(default_factory=list)
    past: list = field(default_factory=list)


@dataclass(slots=True)
class DateGroup:
    date: date
    items: list


@dataclass(slots=True)
class MonthCell:
    day: int
    date: date
    items: list


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    last_day = calendar.monthrange(year, month)[1]
    return datetime.combine(date(year, month, 1), time.min), datetime.combine(date(year, month, last_day), time.max)


def activity_status(activity: Timed, now: datetime | None = None) -> str:
    now = now or local_now()
    if activity.start_at <= now <= activity.end_at:
        return CURRENT
    if activity.start_at > now:
        return UPCOMING
    return PAST


def categorize_activities(activities: Iterable[T], now: datetime | None = None) -> CategorizedActivities:
    """Split activities into current, upcoming and past.

    current and upcoming are ordered by start ascending, past by start
    descending. Sorting is stable, so equal starts keep their input order.
    """
    now = now or local_now()
    result = CategorizedActivities()
    for activity in activities:
        getattr(result, activity_status(activity, now)).append(activity)

    result.current.sort(key=lambda a: a.start_at)
    result.upcoming.sort(key=lambda a: a.start_at)
    result.past.sort(key=lambda a: a.start_at, reverse=True)
    return result


def get_activities_on_date(activities: Iterable[T], day: date | datetime) -> list[T]:
    if isinstance(day, datetime):
        day = day.date()
    day_start, day_end = day_bounds(day)
    return [a for a in activities if a.start_at <= day_end and a.end_at >= day_start]


def get_activities_in_month(activities: Iterable[T], year: int, month: int) -> list[T]:
    """Activities overlapping the month; ``month`` is 1-12."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    month_start, month_end = month_bounds(year, month)
    return [a for a in activities if a.start_at < month_end and a.end_at > month_start]


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def month_options(activities: Iterable[Timed]) -> list[tuple[int, int, str]]:
    """Distinct start months as (year, month, label), newest first."""
    months = {(a.start_at.year, a.start_at.month) for a in activities}
    return [(year, month, month_label(year, month)) for year, month in sorted(months, reverse=True)]


def group_by_start_date(activities: Iterable[T]) -> list[DateGroup]:
    groups: dict[date, list[T]] = {}
    for activity in activities:
        groups.setdefault(activity.start_at.date(), []).append(activity)
    return [DateGroup(date=key, items=groups[key]) for key in sorted(groups)]


def build_month_grid(activities: Sequence[T], year: int, month: int) -> list[MonthCell | None]:
    """Sunday-first month cells; ``None`` pads the days before the 1st."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar counts Monday as 0.
    leading = (first_weekday + 1) % 7
    cells: list[MonthCell | None] = [None] * leading
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        cells.append(MonthCell(day=day_number, date=day, items=get_activities_on_date(activities, day)))
    return cells


def build_year_overview(activities: Sequence[T], year: int) -> list[tuple[int, list[T]]]:
    return [(month, get_activities_in_month(activities, year, month)) for month in range(1, 13)]


def _twelve_hour(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_activity_date(value: datetime | date) -> str:
    """e.g. "Dec 10, 2025"."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_activity_datetime(value: datetime) -> str:
    """e.g. "Dec 10, 2025, 2:30 PM"."""
    return f"{format_activity_date(value)}, {_twelve_hour(value)}"


def days_between(start: date, end: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
