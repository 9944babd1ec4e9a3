from rest_framework import serializers

from taskshare.constants.task import TaskStatus


class GetTaskQueryParamsSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[status.value for status in TaskStatus],
        required=False,
        help_text="Only return tasks in this status",
    )
