from django.db import models


class PostgresUser(models.Model):
    """
    Relational row for a user. email and external_id are unique so that two
    simultaneous first logins for the same identity cannot both insert.
    """

    email = models.EmailField(max_length=320, unique=True)
    name = models.CharField(max_length=255)
    picture = models.URLField(max_length=1000, null=True, blank=True)
    external_id = models.CharField(max_length=255, unique=True)

    class Meta:
        db_table = "users"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.email})"
