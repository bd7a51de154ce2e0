from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.status import Status


class UniversityCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str | None = None
    description: str | None = None
    num_students: int | None = Field(default=None, ge=0)
    website: str | None = None


class UniversityResponse(BaseModel):
    id: int
    user_id: int
    name: str
    location: str | None
    description: str | None
    num_students: int | None
    website: str | None
    status: Status
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
