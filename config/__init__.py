import os

_SETTINGS_BY_ENV = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    """Settings module named by APP_ENV; anything unknown means development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_SETTINGS_BY_ENV.get(env, 'development')}"
