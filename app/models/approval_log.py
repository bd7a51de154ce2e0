"""

approval_log.py

승인/거절 행위 기록(Audit Log) 모델 정의 파일.

대학 / 학생 / 동아리 / 가입 신청에 대한 승인(APPROVE)과
거절(DENY)을 DB에 영구적으로 기록한다.
거절은 대상 계정을 삭제하므로, 대상은 FK가 아닌
(entity_kind, entity_id, target_user_id) 값으로만 남긴다.

설계 원칙:
- 실제 상태 변경과 같은 트랜잭션 안에서 기록
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상)을 명확히 구분

"""

import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class ApprovalAction(str, Enum):
    APPROVE = "APPROVE"
    DENY = "DENY"


"""
승인/거절 행위 로그 모델

- actor_id       : 행위를 수행한 승인권자 ID (계정 삭제 시 NULL)
- entity_kind    : university / student / rso / membership
- entity_id      : 대상 레코드 ID
- target_user_id : 대상 레코드를 소유한 사용자 ID
- action         : APPROVE / DENY
- created_at     : 행위 발생 시각 (UTC)

"""

class ApprovalLog(Base):
    __tablename__ = "approval_logs"

    id: Mapped[int] = mapped_column(primary_key=True)

    actor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True
    )

    entity_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    action: Mapped[ApprovalAction] = mapped_column(SAEnum(ApprovalAction, name="approval_action"), nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
