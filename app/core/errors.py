"""
errors.py

도메인 에러(Error) 분류 및 HTTP 응답 변환 파일.

서비스 계층은 HTTP를 모르고 아래 예외만 발생시키며,
app.main 에 등록된 핸들러가 이를 {"detail": message} 형태의
JSON 응답으로 변환한다.

분류:
- NotFoundError        : 대상이 없거나 기대한 상태가 아님 (404)
- ForbiddenError       : 인증은 되었으나 권한 없음 (403)
- UnauthenticatedError : 토큰 없음 / 유효하지 않음 (401)
- ConflictError        : 유일성 위반 (중복 가입 신청, 중복 이메일 등) (409)
- ValidationError      : 잘못된 입력 (400)
- InternalError        : DB / 트랜잭션 실패 (500)

설계 원칙:
- 메시지는 내부 정보를 노출하지 않는 고정 문구 사용
- 트랜잭션 실패는 rollback 후 InternalError로 표면화

"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class UnauthenticatedError(AppError):
    status_code = 401
    default_message = "Not authenticated"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid input"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
