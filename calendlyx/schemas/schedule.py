from datetime import date, datetime, time

from pydantic import BaseModel, Field


class DayTimesIn(BaseModel):
    start_time: time = time(9, 0)
    end_time: time = time(10, 0)


class ScheduleResolveIn(BaseModel):
    first_day: date
    last_day: date | None = None
    day_times: list[DayTimesIn] = Field(default_factory=lambda: [DayTimesIn()], min_length=1, max_length=3)


class ScheduleResolveOut(BaseModel):
    start_at: datetime
    end_at: datetime
    event_days: int
    dates: list[date]


class TimeOptionOut(BaseModel):
    value: str
    display: str
