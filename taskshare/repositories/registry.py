import logging
from dataclasses import dataclass

from taskshare.constants.messages import RepositoryErrors
from taskshare.repositories.abstract_repository import AbstractTaskRepository, AbstractUserRepository

logger = logging.getLogger(__name__)

POSTGRES_BACKEND = "postgres"
MEMORY_BACKEND = "memory"


@dataclass(frozen=True)
class Repositories:
    users: AbstractUserRepository
    tasks: AbstractTaskRepository


def build_repositories(backend: str) -> Repositories:
    """
    Build the repository pair for the configured storage backend.
    Called once when the app registry is ready; the result is handed to
    services explicitly.
    """
    if backend == POSTGRES_BACKEND:
        from taskshare.repositories.postgres_repository import PostgresTaskRepository, PostgresUserRepository

        return Repositories(users=PostgresUserRepository(), tasks=PostgresTaskRepository())

    if backend == MEMORY_BACKEND:
        logger.info("Using the in-memory store; data is lost when the process exits")
        from taskshare.repositories.memory_repository import (
            InMemoryStore,
            InMemoryTaskRepository,
            InMemoryUserRepository,
        )

        store = InMemoryStore()
        return Repositories(users=InMemoryUserRepository(store), tasks=InMemoryTaskRepository(store))

    raise ValueError(RepositoryErrors.UNKNOWN_STORAGE_BACKEND.format(backend))


def get_repositories() -> Repositories:
    """Repositories selected at startup by TaskShareConfig.ready()."""
    from django.apps import apps

    return apps.get_app_config("taskshare").repositories
