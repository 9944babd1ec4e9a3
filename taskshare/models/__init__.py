from .user import UserModel, ExternalIdentityAssertion
from .task import TaskModel, MUTABLE_TASK_FIELDS
from .postgres import PostgresUser, PostgresTask

__all__ = [
    "UserModel",
    "ExternalIdentityAssertion",
    "TaskModel",
    "MUTABLE_TASK_FIELDS",
    "PostgresUser",
    "PostgresTask",
]
