from unittest import TestCase

from taskshare.constants.messages import ValidationErrors
from taskshare.serializers.get_tasks_serializer import GetTaskQueryParamsSerializer
from taskshare.serializers.task_id_serializer import TaskIdSerializer


class TaskIdSerializerTest(TestCase):
    def test_numeric_id_is_valid(self):
        serializer = TaskIdSerializer(data={"task_id": "42"})

        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["task_id"], 42)

    def test_non_numeric_ids_are_rejected(self):
        for value in ("abc", "0", "-3", "1.5"):
            serializer = TaskIdSerializer(data={"task_id": value})

            self.assertFalse(serializer.is_valid(), value)
            self.assertEqual(str(serializer.errors["task_id"][0]), ValidationErrors.INVALID_TASK_ID_FORMAT)


class GetTaskQueryParamsSerializerTest(TestCase):
    def test_status_filter_is_optional(self):
        serializer = GetTaskQueryParamsSerializer(data={})

        self.assertTrue(serializer.is_valid())
        self.assertNotIn("status", serializer.validated_data)

    def test_unknown_status_filter_is_rejected(self):
        serializer = GetTaskQueryParamsSerializer(data={"status": "done"})
        self.assertFalse(serializer.is_valid())
