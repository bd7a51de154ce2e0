from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.models.event import Category, Visibility


class EventCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: Category = Category.OTHER
    starts_at: datetime
    location: str | None = None
    contact_phone: str | None = None
    contact_email: EmailStr | None = None
    visibility: Visibility
    university_id: int | None = None
    rso_id: int | None = None

    # visibility 별로 필요한 연관 경로 검증
    @model_validator(mode="after")
    def check_scope(self):
        if self.visibility == Visibility.PRIVATE and self.university_id is None:
            raise ValueError("private events require university_id")
        if self.visibility == Visibility.RSO and self.rso_id is None:
            raise ValueError("rso events require rso_id")
        if self.visibility != Visibility.RSO and self.rso_id is not None:
            raise ValueError("only rso events can carry rso_id")
        return self


class EventUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    starts_at: datetime | None = None
    location: str | None = None
    contact_phone: str | None = None
    contact_email: EmailStr | None = None
    visibility: Visibility | None = None
    university_id: int | None = None
    rso_id: int | None = None

    @model_validator(mode="after")
    def check_required_not_null(self):
        for field in ("name", "description", "category", "starts_at", "visibility"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class EventResponse(BaseModel):
    id: int
    name: str
    description: str
    category: Category
    starts_at: datetime
    location: str | None
    contact_phone: str | None
    contact_email: str | None
    visibility: Visibility
    university_id: int | None
    rso_id: int | None
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: int
    event_id: int
    user_id: int
    text: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
