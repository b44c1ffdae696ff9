import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_list(name: str, default: str = "") -> list[str]:
    """Comma-separated environment variable as a list of trimmed, non-empty items."""
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]
