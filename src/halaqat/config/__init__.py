import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; anything unknown means development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "halaqat.config.production"

    if env in {"test", "testing"}:
        return "halaqat.config.testing"

    return "halaqat.config.development"


def parse_weekdays(raw: str) -> tuple:
    """Parse ``"saturday,tuesday"`` into a tuple of names, keeping order."""
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())
