import logging
from typing import Any, Dict, List, Optional, Type

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, models, transaction
from django.db.models.functions import Lower
from django.utils import timezone

from taskshare.constants.task import TaskStatus
from taskshare.exceptions.task_exceptions import ReferentialIntegrityException
from taskshare.exceptions.user_exceptions import UserAlreadyExistsException
from taskshare.models.postgres import PostgresTask, PostgresUser
from taskshare.models.task import TaskModel, MUTABLE_TASK_FIELDS
from taskshare.models.user import UserModel, normalize_email
from taskshare.repositories.abstract_repository import AbstractTaskRepository, AbstractUserRepository

logger = logging.getLogger(__name__)

# Domain field name -> column attribute on PostgresTask
TASK_COLUMN_MAP = {
    "title": "title",
    "description": "description",
    "status": "status",
    "dueDate": "due_date",
    "assignedToId": "assigned_to_id",
    "createdById": "created_by_id",
    "createdAt": "created_at",
}


class BasePostgresRepository:
    """
    Common lookups for Postgres-backed repositories.
    Subclasses map ORM rows to the pydantic domain models.
    """

    def __init__(self, model_class: Type[models.Model]):
        self.model_class = model_class

    def _get_row(self, **lookup) -> Optional[models.Model]:
        try:
            return self.model_class.objects.get(**lookup)
        except ObjectDoesNotExist:
            return None

    def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        return self.model_class.objects.filter(pk=id).exists()


class PostgresUserRepository(BasePostgresRepository, AbstractUserRepository):
    """Postgres repository for user operations."""

    def __init__(self):
        super().__init__(PostgresUser)

    def create(self, data: Dict[str, Any]) -> UserModel:
        try:
            with transaction.atomic():
                row = PostgresUser.objects.create(
                    email=normalize_email(data["email"]),
                    name=data["name"],
                    picture=data.get("picture"),
                    external_id=data["external_id"],
                )
        except IntegrityError as e:
            field = "external_id" if self.get_by_external_id(data["external_id"]) else "email"
            logger.info("User insert rejected by unique constraint on %s", field)
            raise UserAlreadyExistsException(field) from e
        return self._to_model(row)

    def get_by_id(self, id: int) -> Optional[UserModel]:
        row = self._get_row(pk=id)
        return self._to_model(row) if row else None

    def get_by_external_id(self, external_id: str) -> Optional[UserModel]:
        row = self._get_row(external_id=external_id)
        return self._to_model(row) if row else None

    def get_by_email(self, email: str) -> Optional[UserModel]:
        row = self._get_row(email=normalize_email(email))
        return self._to_model(row) if row else None

    def list_all_by_name(self) -> List[UserModel]:
        return [self._to_model(row) for row in PostgresUser.objects.order_by(Lower("name"), "id")]

    @staticmethod
    def _to_model(row: PostgresUser) -> UserModel:
        return UserModel(
            id=row.id,
            email=row.email,
            name=row.name,
            picture=row.picture,
            external_id=row.external_id,
        )


class PostgresTaskRepository(BasePostgresRepository, AbstractTaskRepository):
    """Postgres repository for task operations."""

    def __init__(self):
        super().__init__(PostgresTask)

    def create(self, data: Dict[str, Any]) -> TaskModel:
        self._check_user_references(data)
        status = data.get("status") or TaskStatus.PENDING
        try:
            with transaction.atomic():
                row = PostgresTask.objects.create(
                    title=data["title"],
                    description=data.get("description"),
                    status=TaskStatus(status).value,
                    due_date=data.get("dueDate"),
                    created_at=data.get("createdAt") or timezone.now(),
                    created_by_id=data["createdById"],
                    assigned_to_id=data["assignedToId"],
                )
        except IntegrityError as e:
            raise ReferentialIntegrityException(data.get("assignedToId")) from e
        return self._to_model(row)

    def get_by_id(self, id: int) -> Optional[TaskModel]:
        row = self._get_row(pk=id)
        return self._to_model(row) if row else None

    def update(self, id: int, data: Dict[str, Any]) -> Optional[TaskModel]:
        changes = {}
        for field, value in data.items():
            if field not in MUTABLE_TASK_FIELDS:
                continue
            if field == "status" and value is not None:
                value = TaskStatus(value).value
            changes[TASK_COLUMN_MAP[field]] = value

        if "assigned_to_id" in changes:
            self._check_user_references({"assignedToId": changes["assigned_to_id"]})

        with transaction.atomic():
            if changes:
                updated = PostgresTask.objects.filter(pk=id).update(**changes)
                if not updated:
                    return None
            row = self._get_row(pk=id)
        return self._to_model(row) if row else None

    def delete(self, id: int) -> bool:
        deleted, _ = PostgresTask.objects.filter(pk=id).delete()
        return deleted > 0

    def list_owned(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        queryset = PostgresTask.objects.filter(assigned_to_id=user_id)
        return self._list(queryset, status)

    def list_delegated(self, user_id: int, status: Optional[TaskStatus] = None) -> List[TaskModel]:
        queryset = PostgresTask.objects.filter(created_by_id=user_id).exclude(assigned_to_id=user_id)
        return self._list(queryset, status)

    def list_completed(self, user_id: int) -> List[TaskModel]:
        queryset = PostgresTask.objects.filter(assigned_to_id=user_id)
        return self._list(queryset, TaskStatus.COMPLETED)

    def _list(self, queryset, status: Optional[TaskStatus]) -> List[TaskModel]:
        if status is not None:
            queryset = queryset.filter(status=status.value)
        return [self._to_model(row) for row in queryset.order_by("-created_at", "-id")]

    @staticmethod
    def _check_user_references(data: Dict[str, Any]) -> None:
        for field in ("createdById", "assignedToId"):
            if field in data and not PostgresUser.objects.filter(pk=data[field]).exists():
                logger.warning("Rejected task write referencing missing user %s", data[field])
                raise ReferentialIntegrityException(data[field])

    @staticmethod
    def _to_model(row: PostgresTask) -> TaskModel:
        return TaskModel(
            id=row.id,
            title=row.title,
            description=row.description,
            status=TaskStatus(row.status),
            dueDate=row.due_date,
            createdAt=row.created_at,
            createdById=row.created_by_id,
            assignedToId=row.assigned_to_id,
        )
