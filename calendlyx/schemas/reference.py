from datetime import datetime

from pydantic import BaseModel, Field


class ReferenceCreate(BaseModel):
    name: str = Field(max_length=255)


class ReferenceRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ReferenceOptions(BaseModel):
    activity_types: list[ReferenceRead]
    participants: list[ReferenceRead]
    districts: list[ReferenceRead]
