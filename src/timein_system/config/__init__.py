import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown is development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timein_system.config.production"

    if env in {"test", "testing"}:
        return "timein_system.config.testing"

    return "timein_system.config.development"
