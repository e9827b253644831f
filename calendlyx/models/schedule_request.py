from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, Enum as SqlEnum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from calendlyx.core.timeutils import local_now
from calendlyx.db.session import Base


class RequestStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ScheduleRequest(Base):
    __tablename__ = "schedule_requests"
    __table_args__ = (CheckConstraint("start_at <= end_at", name="ck_schedule_requests_start_before_end"),)

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(255))

    start_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[str | None] = mapped_column(String(512))

    requester_name: Mapped[str] = mapped_column(String(255), nullable=False)
    requester_email: Mapped[str | None] = mapped_column(String(255))
    requester_phone: Mapped[str | None] = mapped_column(String(64))

    status: Mapped[RequestStatus] = mapped_column(
        SqlEnum(RequestStatus), nullable=False, default=RequestStatus.pending
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=local_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=local_now)
