from datetime import datetime, timedelta, timezone
from unittest import TestCase

from taskshare.constants.task import TaskStatus
from taskshare.exceptions.task_exceptions import ReferentialIntegrityException
from taskshare.exceptions.user_exceptions import UserAlreadyExistsException
from taskshare.tests.fixtures.store import build_memory_repositories


class InMemoryUserRepositoryTests(TestCase):
    def setUp(self):
        self.repositories = build_memory_repositories()
        self.users = self.repositories.users

    def test_create_assigns_incrementing_ids(self):
        alice = self.users.get_by_external_id("google-alice")
        bob = self.users.get_by_external_id("google-bob")

        self.assertEqual(alice.id, 1)
        self.assertEqual(bob.id, 2)

    def test_create_rejects_duplicate_external_id(self):
        with self.assertRaises(UserAlreadyExistsException) as context:
            self.users.create(
                {"email": "other@example.com", "name": "Other", "picture": None, "external_id": "google-alice"}
            )
        self.assertEqual(context.exception.field, "external_id")

    def test_create_rejects_duplicate_email(self):
        with self.assertRaises(UserAlreadyExistsException) as context:
            self.users.create(
                {"email": "alice@example.com", "name": "Other", "picture": None, "external_id": "google-other"}
            )
        self.assertEqual(context.exception.field, "email")

    def test_create_rejects_email_differing_only_in_domain_case(self):
        self.users.create({"email": "dan@Example.com", "name": "Dan", "picture": None, "external_id": "g1"})

        with self.assertRaises(UserAlreadyExistsException) as context:
            self.users.create({"email": "dan@Example.com", "name": "Dan", "picture": None, "external_id": "g2"})

        self.assertEqual(context.exception.field, "email")
        self.assertIsNone(self.users.get_by_external_id("g2"))
        self.assertEqual(self.users.get_by_email("dan@EXAMPLE.com").external_id, "g1")

    def test_lookups_return_none_when_missing(self):
        self.assertIsNone(self.users.get_by_id(99))
        self.assertIsNone(self.users.get_by_external_id("unknown"))
        self.assertIsNone(self.users.get_by_email("nobody@example.com"))
        self.assertFalse(self.users.exists(99))

    def test_get_by_email(self):
        self.assertEqual(self.users.get_by_email("bob@example.com").name, "Bob")

    def test_list_all_by_name_is_case_insensitive(self):
        names = [user.name for user in self.users.list_all_by_name()]
        self.assertEqual(names, ["Alice", "Bob", "carol"])

    def test_list_all_by_name_orders_lowercase_names_among_capitalised(self):
        users = build_memory_repositories(with_users=False).users
        for index, name in enumerate(["bob", "Alice", "Carl"]):
            users.create(
                {"email": f"user{index}@example.com", "name": name, "picture": None, "external_id": f"g{index}"}
            )

        self.assertEqual([user.name for user in users.list_all_by_name()], ["Alice", "bob", "Carl"])


class InMemoryTaskRepositoryTests(TestCase):
    def setUp(self):
        self.repositories = build_memory_repositories()
        self.tasks = self.repositories.tasks
        self.base_time = datetime(2026, 10, 1, tzinfo=timezone.utc)

    def _create(self, created_by, assigned_to, offset_hours=0, **extra):
        return self.tasks.create(
            {
                "title": extra.pop("title", "Task"),
                "createdById": created_by,
                "assignedToId": assigned_to,
                "createdAt": self.base_time + timedelta(hours=offset_hours),
                **extra,
            }
        )

    def test_create_applies_defaults(self):
        task = self.tasks.create({"title": "Write report", "createdById": 1, "assignedToId": 2})

        self.assertEqual(task.id, 1)
        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertIsNotNone(task.createdAt)
        self.assertEqual(self.tasks.get_by_id(task.id), task)

    def test_create_rejects_unknown_users(self):
        with self.assertRaises(ReferentialIntegrityException) as context:
            self.tasks.create({"title": "Write report", "createdById": 1, "assignedToId": 42})

        self.assertEqual(context.exception.user_id, 42)
        self.assertEqual(self.tasks.list_delegated(1), [])

    def test_update_changes_only_mutable_fields(self):
        task = self._create(1, 2)

        updated = self.tasks.update(
            task.id,
            {
                "status": TaskStatus.COMPLETED,
                "title": "Renamed",
                "id": 99,
                "createdById": 3,
                "createdAt": self.base_time + timedelta(days=5),
            },
        )

        self.assertEqual(updated.id, task.id)
        self.assertEqual(updated.status, TaskStatus.COMPLETED)
        self.assertEqual(updated.title, "Renamed")
        self.assertEqual(updated.createdById, 1)
        self.assertEqual(updated.createdAt, task.createdAt)

    def test_update_rejects_unknown_assignee(self):
        task = self._create(1, 2)

        with self.assertRaises(ReferentialIntegrityException):
            self.tasks.update(task.id, {"assignedToId": 42})
        self.assertEqual(self.tasks.get_by_id(task.id).assignedToId, 2)

    def test_update_missing_task_returns_none(self):
        self.assertIsNone(self.tasks.update(99, {"title": "Nothing"}))

    def test_delete_is_idempotent(self):
        task = self._create(1, 2)

        self.assertTrue(self.tasks.delete(task.id))
        self.assertFalse(self.tasks.delete(task.id))
        self.assertIsNone(self.tasks.get_by_id(task.id))

    def test_ids_are_not_reused_after_delete(self):
        first = self._create(1, 2)
        self.tasks.delete(first.id)
        second = self._create(1, 2)

        self.assertNotEqual(first.id, second.id)

    def test_views_filter_and_order_newest_first(self):
        delegated = self._create(1, 2, offset_hours=0)
        self_task = self._create(1, 1, offset_hours=1)
        received = self._create(2, 1, offset_hours=2, status=TaskStatus.COMPLETED)

        self.assertEqual([t.id for t in self.tasks.list_owned(1)], [received.id, self_task.id])
        self.assertEqual([t.id for t in self.tasks.list_delegated(1)], [delegated.id])
        self.assertEqual([t.id for t in self.tasks.list_completed(1)], [received.id])
        self.assertEqual([t.id for t in self.tasks.list_owned(2)], [delegated.id])
        self.assertEqual([t.id for t in self.tasks.list_delegated(2)], [received.id])

    def test_same_timestamp_orders_by_id_descending(self):
        first = self._create(1, 1)
        second = self._create(1, 1)

        self.assertEqual([t.id for t in self.tasks.list_owned(1)], [second.id, first.id])

    def test_status_filter_narrows_views(self):
        pending = self._create(1, 2, offset_hours=0)
        self._create(1, 2, offset_hours=1, status=TaskStatus.IN_PROGRESS)

        self.assertEqual([t.id for t in self.tasks.list_delegated(1, TaskStatus.PENDING)], [pending.id])
        self.assertEqual(len(self.tasks.list_owned(2, TaskStatus.IN_PROGRESS)), 1)
