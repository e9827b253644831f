from datetime import date, datetime

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from calendlyx.core.errors import NotFoundError, ValidationFailed
from calendlyx.core.logging import get_logger
from calendlyx.core.timeutils import local_now
from calendlyx.models.activity import Activity
from calendlyx.schemas.activity import ActivityCreate, ActivityRead, ActivityUpdate
from calendlyx.services.categorization import day_bounds
from calendlyx.services.changes import ACTIVITIES, change_feed
from calendlyx.services.storage import storage_operation

logger = get_logger(__name__)


def _ordered(public_only: bool) -> Select[tuple[Activity]]:
    stmt = select(Activity)
    if public_only:
        stmt = stmt.where(Activity.is_public.is_(True))
    return stmt.order_by(Activity.start_at.asc(), Activity.id.asc())


def add_activity(db: Session, data: ActivityCreate) -> Activity:
    now = local_now()
    activity = Activity(**data.model_dump(), created_at=now, updated_at=now)
    with storage_operation(db, "add activity"):
        db.add(activity)
        db.commit()
        db.refresh(activity)
    logger.info("activity added id=%s title=%r", activity.id, activity.title)
    change_feed.publish(ACTIVITIES)
    return activity


def get_activities(db: Session, *, public_only: bool = False) -> list[Activity]:
    with storage_operation(db, "fetch activities"):
        return list(db.scalars(_ordered(public_only)))


def get_activity(db: Session, activity_id: int) -> Activity:
    with storage_operation(db, "fetch activity"):
        activity = db.get(Activity, activity_id)
    if activity is None:
        raise NotFoundError(f"Activity {activity_id} not found")
    return activity


def get_activities_on_date(db: Session, day: date, *, public_only: bool = False) -> list[Activity]:
    """Activities whose [start, end] overlaps ``day``, queried in the database."""
    day_start, day_end = day_bounds(day)
    stmt = _ordered(public_only).where(Activity.start_at <= day_end, Activity.end_at >= day_start)
    with storage_operation(db, "fetch activities on date"):
        return list(db.scalars(stmt))


def update_activity(db: Session, activity_id: int, data: ActivityUpdate) -> Activity:
    activity = get_activity(db, activity_id)
    changes = data.model_dump(exclude_unset=True)
    for key in ("title", "location", "description"):
        if changes.get(key) is not None:
            changes[key] = changes[key].strip()
    # Nullable text fields come back as None when cleared.
    for key in ("type", "participant", "district"):
        if key in changes and changes[key] is not None:
            changes[key] = changes[key].strip() or None
    for key in ("title", "description", "location", "is_public", "start_at", "end_at"):
        if key in changes and changes[key] is None:
            changes.pop(key)

    start_at: datetime = changes.get("start_at", activity.start_at)
    end_at: datetime = changes.get("end_at", activity.end_at)
    if end_at < start_at:
        raise ValidationFailed("end_at must not be before start_at")
    if "title" in changes and not changes["title"]:
        raise ValidationFailed("title must not be blank")

    with storage_operation(db, "update activity"):
        for key, value in changes.items():
            setattr(activity, key, value)
        activity.updated_at = local_now()
        db.commit()
        db.refresh(activity)
    logger.info("activity updated id=%s fields=%s", activity.id, sorted(changes))
    change_feed.publish(ACTIVITIES)
    return activity


def delete_activity(db: Session, activity_id: int) -> None:
    activity = get_activity(db, activity_id)
    with storage_operation(db, "delete activity"):
        db.delete(activity)
        db.commit()
    logger.info("activity deleted id=%s", activity_id)
    change_feed.publish(ACTIVITIES)


def _snapshot(db: Session, public_only: bool) -> list[dict]:
    return [
        ActivityRead.model_validate(activity).model_dump(mode="json")
        for activity in db.scalars(_ordered(public_only))
    ]


change_feed.register(ACTIVITIES, _snapshot)
