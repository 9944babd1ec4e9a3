import logging
from typing import Dict, Iterable, List

from rest_framework.exceptions import ValidationError as DRFValidationError

from taskshare.constants.messages import ValidationErrors
from taskshare.constants.task import TaskStatus, TaskView
from taskshare.dto.task_dto import CreateTaskDTO, TaskDTO, UpdateTaskDTO
from taskshare.dto.user_dto import UserDTO
from taskshare.exceptions.task_exceptions import ReferentialIntegrityException, TaskNotFoundException
from taskshare.models.task import TaskModel
from taskshare.models.user import UserModel
from taskshare.repositories.registry import Repositories
from taskshare.services.task_access_policy import TaskAccessPolicy

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, repositories: Repositories):
        self.tasks = repositories.tasks
        self.users = repositories.users

    def get_tasks(self, actor: UserModel, view: TaskView, status: TaskStatus | None = None) -> List[TaskDTO]:
        """
        Owned: assigned to the actor. Delegated: created by the actor for
        someone else. History: owned and completed. All newest first; the
        optional status filter only narrows a view.
        """
        if view == TaskView.OWNED:
            tasks = self.tasks.list_owned(actor.id, status)
        elif view == TaskView.DELEGATED:
            tasks = self.tasks.list_delegated(actor.id, status)
        elif view == TaskView.HISTORY:
            if status not in (None, TaskStatus.COMPLETED):
                return []
            tasks = self.tasks.list_completed(actor.id)
        else:
            raise ValueError(f"Unknown task view: {view}")

        return self.prepare_task_dtos(tasks)

    def create_task(self, actor: UserModel, dto: CreateTaskDTO) -> TaskDTO:
        """
        Authorship always comes from the actor; a client-supplied creator is
        never consulted.
        """
        validation_errors = {}
        if not dto.title or not dto.title.strip():
            validation_errors["title"] = ValidationErrors.BLANK_TITLE
        if dto.assignedToId is None:
            validation_errors["assignedToId"] = ValidationErrors.MISSING_ASSIGNEE
        elif not self.users.exists(dto.assignedToId):
            validation_errors["assignedToId"] = ValidationErrors.UNKNOWN_ASSIGNEE.format(dto.assignedToId)
        if validation_errors:
            raise DRFValidationError(validation_errors)

        try:
            task = self.tasks.create(
                {
                    "title": dto.title,
                    "description": dto.description,
                    "status": dto.status,
                    "dueDate": dto.dueDate,
                    "createdById": actor.id,
                    "assignedToId": dto.assignedToId,
                }
            )
        except ReferentialIntegrityException as e:
            raise DRFValidationError({"assignedToId": ValidationErrors.UNKNOWN_ASSIGNEE.format(e.user_id)}) from e

        logger.info("User %s created task %s for user %s", actor.id, task.id, task.assignedToId)
        return self.prepare_task_dto(task)

    def update_task(self, actor: UserModel, task_id: int, dto: UpdateTaskDTO) -> TaskDTO:
        current_task = self.tasks.get_by_id(task_id)
        if not current_task:
            raise TaskNotFoundException(task_id)

        TaskAccessPolicy.ensure_can_update(actor.id, current_task)

        changes = dto.changes()
        if "title" in changes and (not changes["title"] or not changes["title"].strip()):
            raise DRFValidationError({"title": ValidationErrors.BLANK_TITLE})
        if "assignedToId" in changes:
            assignee_id = changes["assignedToId"]
            if assignee_id is None:
                raise DRFValidationError({"assignedToId": ValidationErrors.MISSING_ASSIGNEE})
            if not self.users.exists(assignee_id):
                raise DRFValidationError({"assignedToId": ValidationErrors.UNKNOWN_ASSIGNEE.format(assignee_id)})

        if not changes:
            return self.prepare_task_dto(current_task)

        try:
            updated_task = self.tasks.update(task_id, changes)
        except ReferentialIntegrityException as e:
            raise DRFValidationError({"assignedToId": ValidationErrors.UNKNOWN_ASSIGNEE.format(e.user_id)}) from e

        if not updated_task:
            # Deleted between the lookup and the write
            raise TaskNotFoundException(task_id)

        logger.info("User %s updated task %s (%s)", actor.id, task_id, ", ".join(sorted(changes)))
        return self.prepare_task_dto(updated_task)

    def delete_task(self, actor: UserModel, task_id: int) -> None:
        current_task = self.tasks.get_by_id(task_id)
        if not current_task:
            raise TaskNotFoundException(task_id)

        TaskAccessPolicy.ensure_can_delete(actor.id, current_task)

        self.tasks.delete(task_id)
        logger.info("User %s deleted task %s", actor.id, task_id)

    def prepare_task_dto(self, task: TaskModel) -> TaskDTO:
        return self.prepare_task_dtos([task])[0]

    def prepare_task_dtos(self, tasks: Iterable[TaskModel]) -> List[TaskDTO]:
        tasks = list(tasks)
        user_ids = {task.assignedToId for task in tasks} | {task.createdById for task in tasks}
        users: Dict[int, UserDTO] = {}
        for user_id in user_ids:
            user = self.users.get_by_id(user_id)
            if user:
                users[user_id] = UserDTO.from_model(user)

        return [
            TaskDTO(
                **task.model_dump(),
                assignee=users.get(task.assignedToId),
                creator=users.get(task.createdById),
            )
            for task in tasks
        ]
