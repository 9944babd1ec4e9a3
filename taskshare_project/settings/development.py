# Development specific settings
from .base import *  # noqa: F403

DEBUG = True
ALLOWED_HOSTS = ["*"]

CORS_ALLOW_ALL_ORIGINS = True

COOKIE_SETTINGS.update(  # noqa: F405
    {
        "COOKIE_SECURE": False,
        "COOKIE_SAMESITE": "Lax",
    }
)

if not JWT_CONFIG.get("PRIVATE_KEY"):  # noqa: F405
    # Fall back to a shared secret so local runs work without an RSA key pair
    JWT_CONFIG.update(  # noqa: F405
        {
            "ALGORITHM": "HS256",
            "PRIVATE_KEY": SECRET_KEY,  # noqa: F405
            "PUBLIC_KEY": SECRET_KEY,  # noqa: F405
        }
    )

SESSION_COOKIE_SECURE = False
