from unittest import TestCase

from django.apps import apps

from taskshare.repositories.memory_repository import InMemoryTaskRepository, InMemoryUserRepository
from taskshare.repositories.postgres_repository import PostgresTaskRepository, PostgresUserRepository
from taskshare.repositories.registry import build_repositories, get_repositories


class BuildRepositoriesTests(TestCase):
    def test_memory_backend_shares_one_store(self):
        repositories = build_repositories("memory")

        self.assertIsInstance(repositories.users, InMemoryUserRepository)
        self.assertIsInstance(repositories.tasks, InMemoryTaskRepository)
        self.assertIs(repositories.users.store, repositories.tasks.store)

    def test_each_memory_build_is_independent(self):
        first = build_repositories("memory")
        second = build_repositories("memory")

        self.assertIsNot(first.users.store, second.users.store)

    def test_postgres_backend(self):
        repositories = build_repositories("postgres")

        self.assertIsInstance(repositories.users, PostgresUserRepository)
        self.assertIsInstance(repositories.tasks, PostgresTaskRepository)

    def test_unknown_backend_raises(self):
        with self.assertRaises(ValueError):
            build_repositories("redis")

    def test_get_repositories_returns_startup_selection(self):
        self.assertIs(get_repositories(), apps.get_app_config("taskshare").repositories)
        self.assertIsInstance(get_repositories().users, InMemoryUserRepository)
