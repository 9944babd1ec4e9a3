from django.db import models
from django.utils import timezone

from taskshare.constants.task import TaskStatus, TITLE_MAX_LENGTH


class PostgresTask(models.Model):
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.name.replace("_", " ").title()) for status in TaskStatus],
        default=TaskStatus.PENDING.value,
    )
    due_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    created_by = models.ForeignKey(
        "taskshare.PostgresUser",
        on_delete=models.PROTECT,
        related_name="created_tasks",
    )
    assigned_to = models.ForeignKey(
        "taskshare.PostgresUser",
        on_delete=models.PROTECT,
        related_name="assigned_tasks",
    )

    class Meta:
        db_table = "tasks"
        indexes = [
            models.Index(fields=["assigned_to", "-created_at"], name="tasks_assignee_created_idx"),
            models.Index(fields=["created_by", "-created_at"], name="tasks_creator_created_idx"),
            models.Index(fields=["status"], name="tasks_status_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"
