import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DEFAULT_DATABASE_URL = "sqlite:///./catalog.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
SQL_ECHO = _get_bool(os.getenv("SQL_ECHO"), default=False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOWED_ORIGINS = _get_list(
    os.getenv("CORS_ALLOWED_ORIGINS"),
    default=["http://localhost:4200"],
)

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and DATABASE_URL == DEFAULT_DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set in production.")
