import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from taskshare.constants.task import TaskStatus
from taskshare.exceptions.task_exceptions import ReferentialIntegrityException
from taskshare.exceptions.user_exceptions import UserAlreadyExistsException
from taskshare.models.task import TaskModel, MUTABLE_TASK_FIELDS
from taskshare.models.user import UserModel, normalize_email
from taskshare.repositories.abstract_repository import AbstractTaskRepository, AbstractUserRepository

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Arena shared by the in-memory user and task repositories.
    Ids come from incrementing counters and are never reused.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.users: Dict[int, UserModel] = {}
        self.tasks: Dict[int, TaskModel] = {}
        self._user_ids = itertools.count(1)
        self._task_ids = itertools.count(1)

    def next_user_id(self) -> int:
        return next(self._user_ids)

    def next_task_id(self) -> int:
        return next(self._task_ids)


class InMemoryUserRepository(AbstractUserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, data: Dict[str, Any]) -> UserModel:
        data = {**data, "email": normalize_email(data["email"])}
        with self.store.lock:
            for user in self.store.users.values():
                if user.external_id == data["external_id"]:
                    raise UserAlreadyExistsException("external_id")
                if user.email == data["email"]:
                    raise UserAlreadyExistsException("email")

            user = UserModel(id=self.store.next_user_id(), **data)
            self.store.users[user.id] = user
            return user

    def get_by_id(self, id: int) -> Optional[UserModel]:
        return self.store.users.get(id)

    def exists(self, id: int) -> bool:
        return id in self.store.users

    def get_by_external_id(self, external_id: str) -> Optional[UserModel]:
        with self.store.lock:
            return next((user for user in self.store.users.values() if user.external_id == external_id), None)

    def get_by_email(self, email: str) -> Optional[UserModel]:
        email = normalize_email(email)
        with self.store.lock:
            return next((user for user in self.store.users.values() if user.email == email), None)

    def list_all_by_name(self) -> List[UserModel]:
        with self.store.lock:
            users = list(self.store.users.values())
        return sorted(users, key=lambda user: (user.name.lower(), user.id))


class InMemoryTaskRepository(AbstractTaskRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, data: Dict[str, Any]) -> TaskModel:
        with self.store.lock:
            self._check_user_references(data)
            task = TaskModel(
                id=self.store.next_task_id(),
                title=data["title"],
                description=data.get("description"),
                status=data.get("status") or TaskStatus.PENDING,
                dueDate=data.get("dueDate"),
                createdAt=data.get("createdAt") or datetime.now(timezone.utc),
                createdById=data["createdById"],
                assignedToId=data["assignedToId"],
            )
            self.store.tasks[task.id] = task
            return task

    def get_by_id(self, id: int) -> Optional[TaskModel]:
        return self.store.tasks.get(id)

    def exists(self, id: int) -> bool:
        return id in self.store.tasks

    def update(self, id: int, data: Dict[str, Any]) -> Optional[TaskModel]:
        changes = {field: value for field, value in data.items() if field in MUTABLE_TASK_FIELDS}
        with self.store.lock:
            current = self.store.tasks.get(id)
            if current is None:
                return None
            if "assignedToId" in changes:
                self._check_user_references({"assignedToId": changes["assignedToId"]})

            updated = TaskModel.model_validate({**current.model_dump(), **changes})
            self.store.tasks[id] = updated
            return updated

    def delete(self, id: int) -> bool:
        with self.store.lock:
            return self.store.tasks.pop(id, None) is not None

    def list_owned(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        return self._select(
            lambda task: task.assignedToId == user_id and (status is None or task.status == status)
        )

    def list_delegated(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        return self._select(
            lambda task: task.createdById == user_id
            and task.assignedToId != user_id
            and (status is None or task.status == status)
        )

    def list_completed(self, user_id: int) -> List[TaskModel]:
        return self._select(lambda task: task.assignedToId == user_id and task.status == TaskStatus.COMPLETED)

    def _select(self, predicate: Callable[[TaskModel], bool]) -> List[TaskModel]:
        with self.store.lock:
            matching = [task for task in self.store.tasks.values() if predicate(task)]
        return sorted(matching, key=lambda task: (task.createdAt, task.id), reverse=True)

    def _check_user_references(self, data: Dict[str, Any]) -> None:
        for field in ("createdById", "assignedToId"):
            if field in data and data[field] not in self.store.users:
                logger.warning("Rejected task write referencing missing user %s", data[field])
                raise ReferentialIntegrityException(data[field])
