from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class TaskShareConfig(AppConfig):
    name = "taskshare"
    default_auto_field = "django.db.models.BigAutoField"

    repositories = None

    def ready(self):
        """Select the storage backend once for the lifetime of the process"""
        from taskshare.repositories.registry import build_repositories

        backend = settings.STORAGE_BACKEND
        self.repositories = build_repositories(backend)
        logger.info("Storage backend selected: %s", backend)
