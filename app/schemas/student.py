from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.status import Status


class StudentCreateRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    university_id: int


class StudentResponse(BaseModel):
    id: int
    user_id: int
    university_id: int
    first_name: str
    last_name: str
    status: Status
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
