from enum import Enum


# 승인 대상(University / Student / RSO / Membership)의 상태
# pending -> active 로만 이동하며, 거절은 값이 아니라 행 삭제로 표현된다
class Status(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
