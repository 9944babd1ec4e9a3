import os
from dotenv import load_dotenv

load_dotenv()

SETTINGS_MODULES = {
    "DEVELOPMENT": "taskshare_project.settings.development",
    "PRODUCTION": "taskshare_project.settings.production",
    "TEST": "taskshare_project.settings.test",
}


def configure_settings_module():
    """
    Point DJANGO_SETTINGS_MODULE at the settings file for the current ENV.
    An explicitly exported DJANGO_SETTINGS_MODULE always wins.
    """
    env = os.getenv("ENV", "DEVELOPMENT").upper()
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", SETTINGS_MODULES.get(env, SETTINGS_MODULES["DEVELOPMENT"]))
    return os.environ["DJANGO_SETTINGS_MODULE"]
