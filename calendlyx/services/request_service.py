"""Visitor schedule requests and their review lifecycle.

pending -> approved (creates the matching activity) | rejected.
A request may be deleted in any state.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from calendlyx.core.errors import InvalidStatusTransition, NotFoundError
from calendlyx.core.logging import get_logger
from calendlyx.core.timeutils import local_now
from calendlyx.models.activity import Activity
from calendlyx.models.schedule_request import RequestStatus, ScheduleRequest
from calendlyx.schemas.schedule_request import PublicPendingRequest, ScheduleRequestCreate, ScheduleRequestRead
from calendlyx.services.changes import ACTIVITIES, SCHEDULE_REQUESTS, change_feed
from calendlyx.services.storage import storage_operation

logger = get_logger(__name__)


def _newest_first():
    return select(ScheduleRequest).order_by(ScheduleRequest.created_at.desc(), ScheduleRequest.id.desc())


def add_schedule_request(db: Session, data: ScheduleRequestCreate) -> ScheduleRequest:
    now = local_now()
    request = ScheduleRequest(
        **data.model_dump(),
        status=RequestStatus.pending,
        created_at=now,
        updated_at=now,
    )
    with storage_operation(db, "submit request"):
        db.add(request)
        db.commit()
        db.refresh(request)
    logger.info("schedule request added id=%s requester=%r", request.id, request.requester_name)
    change_feed.publish(SCHEDULE_REQUESTS)
    return request


def get_schedule_requests(db: Session) -> list[ScheduleRequest]:
    with storage_operation(db, "fetch requests"):
        return list(db.scalars(_newest_first()))


def get_pending_requests(db: Session, *, limit: int | None = None) -> list[ScheduleRequest]:
    stmt = _newest_first().where(ScheduleRequest.status == RequestStatus.pending)
    if limit is not None:
        stmt = stmt.limit(limit)
    with storage_operation(db, "fetch requests"):
        return list(db.scalars(stmt))


def get_schedule_request(db: Session, request_id: int) -> ScheduleRequest:
    with storage_operation(db, "fetch request"):
        request = db.get(ScheduleRequest, request_id)
    if request is None:
        raise NotFoundError(f"Schedule request {request_id} not found")
    return request


def update_schedule_request_status(db: Session, request_id: int, status: RequestStatus) -> ScheduleRequest:
    """Set the status directly, without creating an activity on approval."""
    request = get_schedule_request(db, request_id)
    with storage_operation(db, "update request"):
        request.status = status
        request.updated_at = local_now()
        db.commit()
        db.refresh(request)
    logger.info("schedule request updated id=%s status=%s", request.id, status.value)
    change_feed.publish(SCHEDULE_REQUESTS)
    return request


def _require_pending(request: ScheduleRequest, action: str) -> None:
    if request.status != RequestStatus.pending:
        raise InvalidStatusTransition(
            f"Cannot {action} request {request.id}: it is already {request.status.value}"
        )


def activity_from_request(request: ScheduleRequest) -> Activity:
    now = local_now()
    return Activity(
        title=request.title,
        description=request.description or "",
        type=request.type,
        start_at=request.start_at,
        end_at=request.end_at,
        location=request.location or "",
        is_public=True,
        participant=request.requester_name,
        created_at=now,
        updated_at=now,
    )


def approve_schedule_request(db: Session, request_id: int) -> tuple[ScheduleRequest, Activity]:
    """Create the activity and mark the request approved in one commit."""
    request = get_schedule_request(db, request_id)
    _require_pending(request, "approve")

    activity = activity_from_request(request)
    with storage_operation(db, "approve request"):
        db.add(activity)
        request.status = RequestStatus.approved
        request.updated_at = local_now()
        db.commit()
        db.refresh(activity)
        db.refresh(request)
    logger.info("schedule request approved id=%s activity_id=%s", request.id, activity.id)
    change_feed.publish(SCHEDULE_REQUESTS)
    change_feed.publish(ACTIVITIES)
    return request, activity


def reject_schedule_request(db: Session, request_id: int) -> ScheduleRequest:
    request = get_schedule_request(db, request_id)
    _require_pending(request, "reject")
    return update_schedule_request_status(db, request_id, RequestStatus.rejected)


def delete_schedule_request(db: Session, request_id: int) -> None:
    request = get_schedule_request(db, request_id)
    with storage_operation(db, "delete request"):
        db.delete(request)
        db.commit()
    logger.info("schedule request deleted id=%s", request_id)
    change_feed.publish(SCHEDULE_REQUESTS)


def _snapshot(db: Session, public_only: bool) -> list[dict]:
    if public_only:
        stmt = _newest_first().where(ScheduleRequest.status == RequestStatus.pending)
        return [PublicPendingRequest.model_validate(item).model_dump(mode="json") for item in db.scalars(stmt)]
    return [ScheduleRequestRead.model_validate(item).model_dump(mode="json") for item in db.scalars(_newest_first())]


change_feed.register(SCHEDULE_REQUESTS, _snapshot)
