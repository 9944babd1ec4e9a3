from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TypeVar, Generic

from pydantic import BaseModel

from taskshare.constants.task import TaskStatus
from taskshare.models.task import TaskModel
from taskshare.models.user import UserModel

T = TypeVar("T", bound=BaseModel)


class AbstractRepository(ABC, Generic[T]):
    """
    Passive storage contract. Implementations keep referential integrity and
    uniqueness but make no access decisions; those belong to the services.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        """Insert a new record and return it with its assigned id."""
        pass

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Get a record by ID."""
        pass

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        pass


class AbstractUserRepository(AbstractRepository[UserModel]):
    """Users are insert-only: there is no update or delete."""

    @abstractmethod
    def get_by_external_id(self, external_id: str) -> Optional[UserModel]:
        """Get user by the identity provider's id."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserModel]:
        """Get user by email address."""
        pass

    @abstractmethod
    def list_all_by_name(self) -> List[UserModel]:
        """All users, name ascending."""
        pass


class AbstractTaskRepository(AbstractRepository[TaskModel]):
    """
    create() defaults status to pending and createdAt to now, and rejects
    dangling user references. update() never touches id, createdAt or
    createdById. delete() of a missing id is a no-op.
    """

    @abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> Optional[TaskModel]:
        """Partially update a task; None when it does not exist."""
        pass

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Delete a task by ID; returns whether a row was removed."""
        pass

    @abstractmethod
    def list_owned(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        """Tasks assigned to the user, newest first."""
        pass

    @abstractmethod
    def list_delegated(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        """Tasks the user created for someone else, newest first."""
        pass

    @abstractmethod
    def list_completed(self, user_id: int) -> List[TaskModel]:
        """Completed tasks assigned to the user, newest first."""
        pass
