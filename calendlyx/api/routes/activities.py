from datetime import date

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.orm import Session

from calendlyx.api import presenters
from calendlyx.api.deps import require_admin
from calendlyx.core.timeutils import local_now
from calendlyx.db.session import get_db
from calendlyx.schemas.activity import (
    ActivityCreate,
    ActivityRead,
    ActivityUpdate,
    ActivityWithStatus,
    CategorizedActivitiesRead,
    DateGroup,
    MonthOption,
    MonthView,
    YearOverview,
)
from calendlyx.services import activity_service
from calendlyx.services.categorization import get_activities_in_month

router = APIRouter(prefix="/admin", tags=["admin-activities"], dependencies=[Depends(require_admin)])

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def _parse_month(value: str) -> tuple[int, int]:
    year, month = value.split("-")
    return int(year), int(month)


@router.get("/activities", response_model=list[ActivityRead])
def get_activities(
    month: str | None = Query(default=None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
) -> list[ActivityRead]:
    activities = activity_service.get_activities(db)
    if month:
        activities = get_activities_in_month(activities, *_parse_month(month))
    return [ActivityRead.model_validate(activity) for activity in activities]


@router.get("/activities/months", response_model=list[MonthOption])
def get_activity_months(db: Session = Depends(get_db)) -> list[MonthOption]:
    return presenters.month_options(activity_service.get_activities(db))


@router.get("/activities/grouped", response_model=list[DateGroup])
def get_activities_grouped(
    month: str | None = Query(default=None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
) -> list[DateGroup]:
    activities = activity_service.get_activities(db)
    if month:
        activities = get_activities_in_month(activities, *_parse_month(month))
    return presenters.date_groups(activities, local_now())


@router.get("/activities/categorized", response_model=CategorizedActivitiesRead)
def get_activities_categorized(db: Session = Depends(get_db)) -> CategorizedActivitiesRead:
    return presenters.categorized(activity_service.get_activities(db), local_now())


@router.get("/activities/{activity_id}", response_model=ActivityRead)
def get_activity(activity_id: int, db: Session = Depends(get_db)) -> ActivityRead:
    return ActivityRead.model_validate(activity_service.get_activity(db, activity_id))


@router.post("/activities", response_model=ActivityRead, status_code=201)
def create_activity(payload: ActivityCreate, db: Session = Depends(get_db)) -> ActivityRead:
    return ActivityRead.model_validate(activity_service.add_activity(db, payload))


@router.patch("/activities/{activity_id}", response_model=ActivityRead)
def update_activity(activity_id: int, payload: ActivityUpdate, db: Session = Depends(get_db)) -> ActivityRead:
    return ActivityRead.model_validate(activity_service.update_activity(db, activity_id, payload))


@router.delete("/activities/{activity_id}", status_code=204)
def delete_activity(activity_id: int, db: Session = Depends(get_db)) -> Response:
    activity_service.delete_activity(db, activity_id)
    return Response(status_code=204)


@router.get("/calendar/day/{day}", response_model=list[ActivityWithStatus])
def get_calendar_day(day: date, db: Session = Depends(get_db)) -> list[ActivityWithStatus]:
    return presenters.with_status(activity_service.get_activities_on_date(db, day), local_now())


@router.get("/calendar/{year}/{month}", response_model=MonthView)
def get_calendar_month(
    year: int,
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
) -> MonthView:
    return presenters.month_view(activity_service.get_activities(db), year, month, local_now())


@router.get("/calendar/{year}", response_model=YearOverview)
def get_calendar_year(year: int, db: Session = Depends(get_db)) -> YearOverview:
    return presenters.year_overview(activity_service.get_activities(db), year, local_now())

