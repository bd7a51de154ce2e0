"""
students.py

학생(Student) 등록 및 승인 API 모음.

주요 기능:
- 학생 계정의 소속 대학 등록 (pending)
- 본인 학생 등록 상태 조회
- 대학 소유자 / 관리자의 학생 목록 조회 및 승인 / 거절

설계 원칙:
- 학생 계정 1개당 학생 등록 1개
- active 대학에만 등록 가능
- 승인권자 판단과 상태 전이는 service(app.services.approval)에 위임
- 거절 시 학생 계정까지 삭제

"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db, require_roles
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.session import atomic
from app.models.status import Status
from app.models.student import Student
from app.models.university import University
from app.models.user import User, Role
from app.schemas.student import StudentCreateRequest, StudentResponse
from app.services.approval import EntityKind, approve, deny
from app.services.guard import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_student(
    body: StudentCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_roles(Role.STUDENT)),
):
    if user.student is not None:
        raise ConflictError("Student already registered for this account")

    university = get_or_404(db, University, body.university_id, "University")
    if university.status != Status.ACTIVE:
        raise ValidationError("University is not active")

    student = Student(**body.model_dump(), user_id=user.id, status=Status.PENDING)
    with atomic(db):
        db.add(student)
    db.refresh(student)

    logger.info("Student %s registered at university %s (pending)", student.id, university.id)
    return {
        "message": "Student registered, pending approval",
        "data": StudentResponse.model_validate(student).model_dump(mode="json"),
    }


"""
본인 학생 등록 상태 조회

- 등록하지 않았으면 404
- 등록했으면 pending / active 상태 반환

"""
@router.get("/me")
def my_student_status(current_user: User = Depends(get_current_user)):
    student = current_user.student
    if student is None:
        raise NotFoundError("Student not found")
    return {
        "message": f"Student is {student.status.value}",
        "data": StudentResponse.model_validate(student).model_dump(mode="json"),
    }


"""
학생 목록 조회

- 대학 계정: 본인 대학 소속 학생만
- 관리자: 전체 (university_id 로 필터 가능)
- status 기본값 pending (승인 대기 목록)

"""
@router.get("")
def list_students(
    status_filter: Status = Query(default=Status.PENDING, alias="status"),
    university_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(Role.UNIVERSITY, Role.ADMIN)),
):
    stmt = select(Student).where(Student.status == status_filter)

    if current_user.role == Role.UNIVERSITY:
        owned = current_user.university
        if owned is None:
            return {"data": [], "meta": {"count": 0}}
        stmt = stmt.where(Student.university_id == owned.id)
    elif university_id is not None:
        stmt = stmt.where(Student.university_id == university_id)

    rows = db.scalars(stmt.order_by(Student.id)).all()
    return {
        "data": [StudentResponse.model_validate(s).model_dump(mode="json") for s in rows],
        "meta": {"count": len(rows)},
    }


@router.post("/{student_id}/approve")
def approve_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        student = approve(db, current_user, EntityKind.STUDENT, student_id)

    return {
        "message": "Student approved successfully",
        "data": StudentResponse.model_validate(student).model_dump(mode="json"),
    }


@router.post("/{student_id}/deny")
def deny_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        snapshot = deny(db, current_user, EntityKind.STUDENT, student_id)

    return {
        "message": "Student denied and account deleted",
        "data": snapshot,
    }
