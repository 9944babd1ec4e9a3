from .base import *  # noqa: F403
import os

DEBUG = False

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS").split(",")

CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

SPECTACULAR_SETTINGS.update(  # noqa: F405
    {
        "SWAGGER_UI_SETTINGS": {
            "url": "/api/schema",
        },
    }
)
