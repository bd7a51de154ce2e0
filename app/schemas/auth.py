from typing import Literal

from pydantic import BaseModel, EmailStr, Field


# 셀프 가입은 대학 / 학생 계정만 가능 (ADMIN 은 스크립트로 생성)
RegisterRole = Literal["university", "student"]


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=64)
    role: RegisterRole = "student"

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class DeleteMeRequest(BaseModel):
    password: str

class EditAccountRequest(BaseModel):
    email: EmailStr | None = None
    new_password: str | None = Field(default=None, min_length=6, max_length=64)
    current_password: str = Field(..., min_length=1)
