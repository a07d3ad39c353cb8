import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """
    Runtime configuration for the API.

    Every field has a default suitable for local development; deployments
    override them through environment variables (or a `.env` file).
    """

    # SQLAlchemy URL. SQLite for local runs, postgresql+psycopg:// in production.
    database_url: str = "sqlite:///./grindlog.db"
    # HMAC key used to sign access tokens. Must be overridden outside development.
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    # Token validity window from issuance (7 days).
    access_token_expire_minutes: int = 60 * 24 * 7
    # "production" hides stack traces in error responses.
    environment: str = "development"
    log_level: str = "INFO"
    # IANA zone used to decide what "today" is and to bucket logs by day.
    timezone: str = "UTC"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    # Create missing tables on startup (alembic handles real migrations).
    auto_create_tables: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            database_url=os.getenv("SQLALCHEMY_DATABASE_URL", defaults.database_url),
            secret_key=os.getenv("SECRET_KEY", defaults.secret_key),
            algorithm=os.getenv("ALGORITHM", defaults.algorithm),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", defaults.access_token_expire_minutes)
            ),
            environment=os.getenv("ENVIRONMENT", defaults.environment),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            timezone=os.getenv("APP_TIMEZONE", defaults.timezone),
            cors_origins=_env_list("CORS_ORIGINS", defaults.cors_origins),
            auto_create_tables=_env_bool("AUTO_CREATE_TABLES", defaults.auto_create_tables),
        )


@dataclass(frozen=True)
class QueryDefaults:
    """Default page sizes and look-back windows for list endpoints."""

    # GET /api/workouts/sessions and /api/workouts/cardio page size
    session_limit: int = 20
    # GET /api/progress/measurements history length
    measurement_limit: int = 30
    # GET /api/progress/exercise/{id} number of session logs considered
    exercise_log_limit: int = 20
    # GET /api/progress/exercise/{id}/history look-back in days
    exercise_history_days: int = 90
    # Stats look-back in days (progress stats, admin growth/activity)
    stats_days: int = 30
    # GET /api/supplements/logs/history page size
    supplement_log_limit: int = 50
    # GET /api/routines/completions/history page size
    routine_completion_limit: int = 30
    # GET /api/cardio/logs page size
    cardio_log_limit: int = 30
    # Admin user/group listings page size
    admin_page_limit: int = 50
    # GET /api/groups/{id}/feed length
    feed_limit: int = 20
    # GET /api/groups/search/public result cap
    group_search_limit: int = 20
    # GET /api/diet/foods result cap
    food_search_limit: int = 50
    # GET /api/diet/log result cap
    diet_log_limit: int = 100
    # GET /api/admin/stats/exercises result cap
    popular_exercise_limit: int = 20
    # Largest page a client may request
    max_page_limit: int = 500


QUERY_DEFAULTS = QueryDefaults()
