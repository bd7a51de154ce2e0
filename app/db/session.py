"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
애플리케이션 전반에서 공통으로 사용하는 DB 연결을 관리한다.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- 여러 statement로 이루어진 변경은 atomic() 한 단위로 commit / rollback
- pool_pre_ping=True로 유휴 연결 오류 방지

관련 파일:
- app.core.config        : DATABASE_URL 설정
- app.core.deps          : get_db 의존성

"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import AppError, ConflictError, InternalError

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    # SQLite는 TestClient 스레드풀에서 같은 커넥션을 공유하므로 스레드 체크 해제
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


# SQLAlchemy Engine 생성
# pool_pre_ping=True:
#   장시간 idle 후 끊어진 DB 커넥션을 자동으로 감지/재연결
engine = build_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


"""
트랜잭션 단위(Unit) 컨텍스트

- 블록이 정상 종료되면 commit
- 블록 안에서 예외가 발생하면 먼저 rollback 한 뒤
  - 도메인 에러(AppError)는 그대로 다시 발생
  - UNIQUE 등 무결성 위반은 ConflictError
  - 그 밖의 실패는 InternalError ("Database error: <예외 타입>")
- RSO 생성 + 권한 승격, 거절 + 연쇄 삭제처럼
  둘 이상의 statement가 함께 반영되어야 하는 변경에 사용

"""

@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity error, transaction rolled back: %s", e.orig)
        raise ConflictError("Duplicate or conflicting record") from e
    except Exception as e:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise InternalError(f"Database error: {type(e).__name__}") from e
