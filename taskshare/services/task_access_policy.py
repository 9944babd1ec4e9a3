from taskshare.constants.messages import ApiErrors
from taskshare.exceptions.task_exceptions import TaskPermissionDeniedException
from taskshare.models.task import TaskModel


class TaskAccessPolicy:
    """
    Who may change which task.

    Creating is open to every authenticated actor. Updating, which includes
    status transitions, is allowed for the creator and the current assignee.
    Deleting is allowed for the creator only. Any status may follow any other;
    reopening a completed task is an ordinary update.
    """

    @staticmethod
    def can_update(actor_id: int, task: TaskModel) -> bool:
        return actor_id in (task.createdById, task.assignedToId)

    @staticmethod
    def can_delete(actor_id: int, task: TaskModel) -> bool:
        return actor_id == task.createdById

    @classmethod
    def ensure_can_update(cls, actor_id: int, task: TaskModel) -> None:
        if not cls.can_update(actor_id, task):
            raise TaskPermissionDeniedException(ApiErrors.NOT_AUTHORIZED_TO_UPDATE)

    @classmethod
    def ensure_can_delete(cls, actor_id: int, task: TaskModel) -> None:
        if not cls.can_delete(actor_id, task):
            raise TaskPermissionDeniedException(ApiErrors.NOT_AUTHORIZED_TO_DELETE)
