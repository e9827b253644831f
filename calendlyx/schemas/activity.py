from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from calendlyx.core.timeutils import to_local_naive


class ActivityBase(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    description: str = ""
    type: str | None = None
    start_at: datetime
    end_at: datetime
    location: str = ""
    is_public: bool = True
    participant: str | None = None
    district: str | None = None

    @field_validator("title", "description", "location")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("type", "participant", "district")
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


class ActivityCreate(ActivityBase):
    pass


class ActivityUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=512)
    description: str | None = None
    type: str | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    location: str | None = None
    is_public: bool | None = None
    participant: str | None = None
    district: str | None = None

    @field_validator("start_at", "end_at")
    @classmethod
    def _local(cls, value: datetime | None) -> datetime | None:
        return to_local_naive(value) if value is not None else None

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.start_at is not None and self.end_at is not None and self.end_at < self.start_at:
            raise ValueError("end_at must not be before start_at")
        return self


class ActivityRead(BaseModel):
    id: int
    title: str
    description: str
    type: str | None
    start_at: datetime
    end_at: datetime
    location: str
    is_public: bool
    participant: str | None
    district: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityWithStatus(ActivityRead):
    status: str


class CategorizedActivitiesRead(BaseModel):
    current: list[ActivityRead]
    upcoming: list[ActivityRead]
    past: list[ActivityRead]


class MonthOption(BaseModel):
    key: str
    label: str
    year: int
    month: int


class DateGroup(BaseModel):
    date: date
    label: str
    activities: list[ActivityWithStatus]


class CalendarDay(BaseModel):
    day: int
    date: date
    activities: list[ActivityWithStatus]


class MonthView(BaseModel):
    year: int
    month: int
    label: str
    cells: list[CalendarDay | None]
    activities: list[ActivityWithStatus]
    groups: list[DateGroup]


class MonthSummary(BaseModel):
    month: int
    label: str
    count: int
    activities: list[ActivityWithStatus]


class YearOverview(BaseModel):
    year: int
    months: list[MonthSummary]
