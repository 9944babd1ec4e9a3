from rest_framework import serializers

from taskshare.constants.messages import ValidationErrors
from taskshare.constants.task import DEFAULT_TASK_STATUS, TITLE_MAX_LENGTH, TaskStatus


class CreateTaskSerializer(serializers.Serializer):
    title = serializers.CharField(
        required=True, allow_blank=False, max_length=TITLE_MAX_LENGTH, help_text="Title of the task"
    )
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, help_text="Description of the task"
    )
    status = serializers.ChoiceField(
        required=False,
        choices=[status.value for status in TaskStatus],
        default=DEFAULT_TASK_STATUS.value,
        help_text="Status of the task (pending, in-progress, completed)",
    )
    dueDate = serializers.DateField(required=False, allow_null=True, help_text="Due date in YYYY-MM-DD format")
    assignedToId = serializers.IntegerField(
        required=True,
        min_value=1,
        help_text="Id of the team member the task is assigned to",
        error_messages={"required": ValidationErrors.MISSING_ASSIGNEE, "null": ValidationErrors.MISSING_ASSIGNEE},
    )

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.BLANK_TITLE)
        return value
