from datetime import date

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from calendlyx.api import presenters
from calendlyx.core.config import settings
from calendlyx.core.timeutils import local_now
from calendlyx.db.session import get_db
from calendlyx.schemas.activity import ActivityWithStatus, CategorizedActivitiesRead, MonthView, YearOverview
from calendlyx.schemas.schedule_request import PublicPendingRequest, ScheduleRequestCreate, ScheduleRequestRead
from calendlyx.services import activity_service, request_service

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/activities", response_model=CategorizedActivitiesRead)
def get_public_activities(db: Session = Depends(get_db)) -> CategorizedActivitiesRead:
    return presenters.categorized(activity_service.get_activities(db, public_only=True), local_now())


@router.get("/activities/today", response_model=list[ActivityWithStatus])
def get_public_activities_today(db: Session = Depends(get_db)) -> list[ActivityWithStatus]:
    now = local_now()
    activities = activity_service.get_activities_on_date(db, now.date(), public_only=True)
    return presenters.with_status(activities, now)


@router.get("/activities/on/{day}", response_model=list[ActivityWithStatus])
def get_public_activities_on(day: date, db: Session = Depends(get_db)) -> list[ActivityWithStatus]:
    activities = activity_service.get_activities_on_date(db, day, public_only=True)
    return presenters.with_status(activities, local_now())


@router.get("/calendar/{year}/{month}", response_model=MonthView)
def get_public_month(
    year: int,
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
) -> MonthView:
    activities = activity_service.get_activities(db, public_only=True)
    return presenters.month_view(activities, year, month, local_now())


@router.get("/calendar/{year}", response_model=YearOverview)
def get_public_year(year: int, db: Session = Depends(get_db)) -> YearOverview:
    activities = activity_service.get_activities(db, public_only=True)
    return presenters.year_overview(activities, year, local_now())


@router.get("/requests/pending", response_model=list[PublicPendingRequest])
def get_public_pending_requests(db: Session = Depends(get_db)) -> list[PublicPendingRequest]:
    requests = request_service.get_pending_requests(db, limit=settings.public_pending_limit)
    return [PublicPendingRequest.model_validate(item) for item in requests]


@router.post("/requests", response_model=ScheduleRequestRead, status_code=201)
def submit_schedule_request(payload: ScheduleRequestCreate, db: Session = Depends(get_db)) -> ScheduleRequestRead:
    return ScheduleRequestRead.model_validate(request_service.add_schedule_request(db, payload))
