from fastapi import APIRouter

from calendlyx.core.errors import ValidationFailed
from calendlyx.schemas.schedule import ScheduleResolveIn, ScheduleResolveOut, TimeOptionOut
from calendlyx.services.date_range import DayTimes, resolve_schedule, time_options

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/time-options", response_model=list[TimeOptionOut])
def get_time_options() -> list[TimeOptionOut]:
    return [TimeOptionOut(value=value, display=display) for value, display in time_options()]


@router.post("/resolve", response_model=ScheduleResolveOut)
def resolve(payload: ScheduleResolveIn) -> ScheduleResolveOut:
    day_times = [DayTimes(start_time=slot.start_time, end_time=slot.end_time) for slot in payload.day_times]
    try:
        schedule = resolve_schedule(payload.first_day, payload.last_day, day_times)
    except ValueError as exc:
        raise ValidationFailed(str(exc)) from exc
    return ScheduleResolveOut(
        start_at=schedule.start_at,
        end_at=schedule.end_at,
        event_days=schedule.event_days,
        dates=schedule.dates,
    )
