# Base.metadata에 모든 테이블을 등록하기 위한 import 모음
from app.models.user import User, Role  # noqa: F401
from app.models.status import Status  # noqa: F401
from app.models.university import University  # noqa: F401
from app.models.student import Student  # noqa: F401
from app.models.rso import RSO, RSOMembership  # noqa: F401
from app.models.event import Event, EventComment, EventRating, Visibility, Category  # noqa: F401
from app.models.approval_log import ApprovalLog, ApprovalAction  # noqa: F401
