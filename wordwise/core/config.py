# Fichier: wordwise/core/config.py
from pydantic_settings import BaseSettings
from typing import List
from pydantic import ValidationError, field_validator
import sys

class Settings(BaseSettings):
    DATABASE_URL: str
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
        "http://127.0.0.1:5173",
    ]

    ENVIRONMENT: str = "development"

    # La clé secrète pour vérifier les JWTs émis par le service d'authentification.
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300
    DATABASE_CONNECTION_MAX_RETRIES: int = 1
    DATABASE_CONNECTION_RETRY_BACKOFF_SECONDS: float = 1.0

    # --- Practice engine ---
    # Calendar days (streaks, history buckets) are computed in this zone.
    SCHEDULER_TIMEZONE: str = "UTC"
    PRACTICE_DEFAULT_LIMIT: int = 10
    PRACTICE_MAX_LIMIT: int = 100
    HISTORY_DEFAULT_DAYS: int = 30
    HISTORY_MAX_DAYS: int = 365
    RECORD_ATTEMPT_MAX_RETRIES: int = 3

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Upgrade legacy Postgres URLs to an explicit psycopg2 driver.

        Managed Postgres providers still expose ``postgres://`` URLs, an alias
        SQLAlchemy no longer ships. Those are rewritten so the engine boots;
        SQLite and URLs that already name a driver are left untouched.
        """

        if not isinstance(value, str):
            return value

        replacements = {
            "postgres://": "postgresql+psycopg2://",
            "postgresql://": "postgresql+psycopg2://",
        }

        for prefix, target in replacements.items():
            if value.startswith(prefix):
                return target + value[len(prefix) :]

        return value

    @field_validator("SCHEDULER_TIMEZONE")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone: {value}") from exc
        return value


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Pretty-print missing or invalid environment variables.

    The exception bubbles up during module import, which makes it hard to spot
    which variable is responsible, so the structured payload is written to
    stderr before re-raising.
    """

    header = "Configuration error while loading environment variables:"
    print(header, file=sys.stderr)

    details = exc.errors()
    if details:
        for error in details:
            location = ".".join(str(part) for part in error.get("loc", ()))
            message = error.get("msg", "Unknown validation error")
            type_name = error.get("type")
            hint_parts = [message]
            if type_name:
                hint_parts.append(f"(type={type_name})")
            hint = " ".join(hint_parts)
            print(f"  - {location}: {hint}", file=sys.stderr)
    else:
        print(exc, file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
