from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.user import Role


# 🔹 유저 응답용 (password_hash 제외)
class UserResponse(BaseModel):
    id: int
    email: str
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)  # SQLAlchemy → Pydantic 변환
