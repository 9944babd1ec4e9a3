from datetime import date, datetime

from pydantic import BaseModel

from taskshare.constants.task import TaskStatus
from taskshare.dto.user_dto import UserDTO


class TaskDTO(BaseModel):
    """Task as returned to clients, enriched with assignee and creator display fields."""

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    dueDate: date | None = None
    createdAt: datetime
    createdById: int
    assignedToId: int
    assignee: UserDTO | None = None
    creator: UserDTO | None = None


class CreateTaskDTO(BaseModel):
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    dueDate: date | None = None
    assignedToId: int


class UpdateTaskDTO(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    dueDate: date | None = None
    assignedToId: int | None = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent, so explicit nulls are kept."""
        return self.model_dump(exclude_unset=True)
