from enum import Enum


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskView(Enum):
    OWNED = "owned"
    DELEGATED = "delegated"
    HISTORY = "history"


DEFAULT_TASK_STATUS = TaskStatus.PENDING
TITLE_MAX_LENGTH = 500
