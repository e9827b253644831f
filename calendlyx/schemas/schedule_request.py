from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from calendlyx.core.timeutils import to_local_naive
from calendlyx.models.schedule_request import RequestStatus
from calendlyx.schemas.activity import ActivityRead


class ScheduleRequestCreate(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    description: str | None = None
    type: str | None = None
    start_at: datetime
    end_at: datetime
    location: str | None = None
    requester_name: str = Field(min_length=1, max_length=255)
    requester_email: str | None = Field(default=None, max_length=255)
    requester_phone: str | None = Field(default=None, max_length=64)

    @field_validator("title", "requester_name")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("description", "type", "location", "requester_email", "requester_phone")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("start_at", "end_at")
    @classmethod
    def _local(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.end_at < self.start_at:
            raise ValueError("end_at must not be before start_at")
        return self


class ScheduleRequestRead(BaseModel):
    id: int
    title: str
    description: str | None
    type: str | None
    start_at: datetime
    end_at: datetime
    location: str | None
    requester_name: str
    requester_email: str | None
    requester_phone: str | None
    status: RequestStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PublicPendingRequest(BaseModel):
    """What visitors may see of a request still awaiting review."""

    id: int
    title: str
    start_at: datetime
    end_at: datetime
    requester_name: str

    model_config = {"from_attributes": True}


class ScheduleRequestBoard(BaseModel):
    pending: list[ScheduleRequestRead]
    reviewed: list[ScheduleRequestRead]


class ApprovalRead(BaseModel):
    request: ScheduleRequestRead
    activity: ActivityRead
