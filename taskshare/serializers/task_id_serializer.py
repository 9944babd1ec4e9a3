from rest_framework import serializers

from taskshare.constants.messages import ValidationErrors


class TaskIdSerializer(serializers.Serializer):
    task_id = serializers.IntegerField(
        min_value=1,
        error_messages={
            "invalid": ValidationErrors.INVALID_TASK_ID_FORMAT,
            "min_value": ValidationErrors.INVALID_TASK_ID_FORMAT,
            "max_string_length": ValidationErrors.INVALID_TASK_ID_FORMAT,
        },
    )
