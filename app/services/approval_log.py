"""
services/approval_log.py

승인/거절 행위 로그 기록 서비스.

승인 상태 머신(app.services.approval)에서 호출되며,
로그 기록은 상태 변경과 같은 트랜잭션에 포함된다.

NOTE:
- db.commit()은 호출 측(라우터의 atomic 블록)에서 수행

"""

from sqlalchemy.orm import Session
from app.models.approval_log import ApprovalLog, ApprovalAction


def write_approval_log(
    db: Session,
    *,
    actor_id,
    action: ApprovalAction,
    entity_kind: str,
    entity_id: int,
    target_user_id=None,
):
    log = ApprovalLog(
        actor_id=actor_id,
        action=action,
        entity_kind=entity_kind,
        entity_id=entity_id,
        target_user_id=target_user_id,
    )
    db.add(log)
    db.flush()
    return log
