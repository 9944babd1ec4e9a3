from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from taskshare.constants.task import TaskStatus


class TaskModel(BaseModel):
    id: int
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    dueDate: date | None = None
    createdAt: datetime
    createdById: int
    assignedToId: int

    model_config = ConfigDict(frozen=True)

    @property
    def is_self_task(self) -> bool:
        return self.createdById == self.assignedToId

    @property
    def is_delegated(self) -> bool:
        return not self.is_self_task


# Fields a caller may change after creation; everything else is fixed at insert time
MUTABLE_TASK_FIELDS = frozenset({"title", "description", "status", "dueDate", "assignedToId"})
