from rest_framework import serializers

from taskshare.constants.messages import ValidationErrors
from taskshare.constants.task import TITLE_MAX_LENGTH, TaskStatus


class UpdateTaskSerializer(serializers.Serializer):
    """
    Partial update body. Fields not declared here (id, createdById,
    createdAt) are dropped, so authorship can never be rewritten.
    """

    title = serializers.CharField(required=False, allow_blank=True, max_length=TITLE_MAX_LENGTH)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(required=False, choices=[status.value for status in TaskStatus])
    dueDate = serializers.DateField(required=False, allow_null=True)
    assignedToId = serializers.IntegerField(
        required=False,
        min_value=1,
        error_messages={"null": ValidationErrors.MISSING_ASSIGNEE},
    )

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.BLANK_TITLE)
        return value
