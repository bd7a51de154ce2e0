from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.status import Status


class RSOCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    university_id: int
    description: str | None = None


class RSOResponse(BaseModel):
    id: int
    university_id: int
    admin_id: int
    name: str
    description: str | None
    status: Status
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MembershipResponse(BaseModel):
    id: int
    user_id: int
    rso_id: int
    status: Status
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
