from .base import *  # noqa: F403

TESTING = True
DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Views and integration tests run against the in-memory arena; ORM repository
# tests instantiate the Postgres repositories directly on SQLite.
STORAGE_BACKEND = "memory"

JWT_CONFIG = {
    "ALGORITHM": "HS256",
    "PRIVATE_KEY": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
    "PUBLIC_KEY": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
    "ACCESS_TOKEN_LIFETIME": 3600,
    "REFRESH_TOKEN_LIFETIME": 604800,
}

GOOGLE_OAUTH.update(  # noqa: F405
    {
        "CLIENT_ID": "test-client-id",
        "CLIENT_SECRET": "test-client-secret",
        "REDIRECT_URI": "http://testserver/api/auth/google/callback",
        "WORKSPACE_DOMAIN": None,
    }
)

APP_URL = "http://testserver"
COOKIE_SETTINGS.update({"COOKIE_SECURE": False, "COOKIE_DOMAIN": None})  # noqa: F405

LOGGING["loggers"]["taskshare"]["level"] = "WARNING"  # noqa: F405
