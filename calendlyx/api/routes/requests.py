from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from calendlyx.api.deps import require_admin
from calendlyx.db.session import get_db
from calendlyx.models.schedule_request import RequestStatus
from calendlyx.schemas.activity import ActivityRead
from calendlyx.schemas.schedule_request import ApprovalRead, ScheduleRequestBoard, ScheduleRequestRead
from calendlyx.services import request_service

router = APIRouter(prefix="/admin/requests", tags=["admin-requests"], dependencies=[Depends(require_admin)])


@router.get("", response_model=ScheduleRequestBoard)
def get_requests(db: Session = Depends(get_db)) -> ScheduleRequestBoard:
    requests = [ScheduleRequestRead.model_validate(item) for item in request_service.get_schedule_requests(db)]
    return ScheduleRequestBoard(
        pending=[r for r in requests if r.status == RequestStatus.pending],
        reviewed=[r for r in requests if r.status != RequestStatus.pending],
    )


@router.get("/{request_id}", response_model=ScheduleRequestRead)
def get_request(request_id: int, db: Session = Depends(get_db)) -> ScheduleRequestRead:
    return ScheduleRequestRead.model_validate(request_service.get_schedule_request(db, request_id))


@router.post("/{request_id}/approve", response_model=ApprovalRead)
def approve_request(request_id: int, db: Session = Depends(get_db)) -> ApprovalRead:
    request, activity = request_service.approve_schedule_request(db, request_id)
    return ApprovalRead(
        request=ScheduleRequestRead.model_validate(request),
        activity=ActivityRead.model_validate(activity),
    )


@router.post("/{request_id}/reject", response_model=ScheduleRequestRead)
def reject_request(request_id: int, db: Session = Depends(get_db)) -> ScheduleRequestRead:
    return ScheduleRequestRead.model_validate(request_service.reject_schedule_request(db, request_id))


@router.delete("/{request_id}", status_code=204)
def delete_request(request_id: int, db: Session = Depends(get_db)) -> Response:
    request_service.delete_schedule_request(db, request_id)
    return Response(status_code=204)
