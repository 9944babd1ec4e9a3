import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PostgresUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=320, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("picture", models.URLField(blank=True, max_length=1000, null=True)),
                ("external_id", models.CharField(max_length=255, unique=True)),
            ],
            options={
                "db_table": "users",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PostgresTask",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=500)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("in-progress", "In Progress"),
                            ("completed", "Completed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("due_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                (
                    "assigned_to",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assigned_tasks",
                        to="taskshare.postgresuser",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_tasks",
                        to="taskshare.postgresuser",
                    ),
                ),
            ],
            options={
                "db_table": "tasks",
                "indexes": [
                    models.Index(fields=["assigned_to", "-created_at"], name="tasks_assignee_created_idx"),
                    models.Index(fields=["created_by", "-created_at"], name="tasks_creator_created_idx"),
                    models.Index(fields=["status"], name="tasks_status_idx"),
                ],
            },
        ),
    ]
