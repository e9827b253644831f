"""Multi-day range picking for the activity and request forms.

A range is chosen with two calendar clicks; each selected day can carry its
own start/end time, and the first and last of those produce the activity's
start and end instants.
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from calendlyx.services.categorization import days_between

MAX_DAY_SLOTS = 3
DEFAULT_START_TIME = time(9, 0)
DEFAULT_END_TIME = time(10, 0)


@dataclass(slots=True)
class DayTimes:
    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME


@dataclass(slots=True)
class ResolvedSchedule:
    start_at: datetime
    end_at: datetime
    event_days: int
    dates: list[date]


@dataclass(slots=True)
class DateRangeSelection:
    start: date | None = None
    end: date | None = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def click(self, day: date) -> "DateRangeSelection":
        if self.start is None or self.is_complete:
            self.start, self.end = day, None
            return self
        if day < self.start:
            self.start, self.end = day, self.start
        else:
            self.end = day
        return self

    def reset(self) -> None:
        self.start = None
        self.end = None

    @property
    def event_days(self) -> int:
        if not self.is_complete:
            return 1
        return (self.end - self.start).days + 1

    @property
    def dates(self) -> list[date]:
        if self.start is None:
            return []
        return days_between(self.start, self.end or self.start)

    def contains(self, day: date) -> bool:
        if not self.is_complete:
            return day == self.start
        return self.start <= day <= self.end


def resolve_schedule(first_day: date, last_day: date | None, day_times: list[DayTimes]) -> ResolvedSchedule:
    """Turn a day range plus per-day times into start/end instants.

    Day slots beyond the third reuse the third slot's times, so the end
    instant is always on ``last_day``, not on the third selected day.
    """
    if last_day is None:
        last_day = first_day
    if last_day < first_day:
        first_day, last_day = last_day, first_day
    if not day_times:
        raise ValueError("at least one day slot is required")

    dates = days_between(first_day, last_day)
    needed = min(len(dates), MAX_DAY_SLOTS)
    if len(day_times) < needed:
        raise ValueError(f"day {len(day_times) + 1}: start and end time are required")

    start_at = datetime.combine(first_day, day_times[0].start_time)
    end_at = datetime.combine(last_day, day_times[needed - 1].end_time)
    if end_at < start_at:
        raise ValueError("end time must not be before start time")

    return ResolvedSchedule(start_at=start_at, end_at=end_at, event_days=len(dates), dates=dates)


def time_options(first_hour: int = 6, last_hour: int = 22, step_minutes: int = 30) -> list[tuple[str, str]]:
    """Form time choices as (``HH:MM``, ``h:MM AM``) pairs."""
    options = []
    for hour in range(first_hour, last_hour + 1):
        for minute in range(0, 60, step_minutes):
            display_hour = hour % 12 or 12
            suffix = "AM" if hour < 12 else "PM"
            options.append((f"{hour:02d}:{minute:02d}", f"{display_hour}:{minute:02d} {suffix}"))
    return options
