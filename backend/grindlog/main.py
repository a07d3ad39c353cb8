import logging
import time
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grindlog.api import (
    admin,
    cardio,
    dashboard,
    diet,
    groups,
    login,
    nutrition,
    onboarding,
    progress,
    routines,
    supplements,
    templates,
    users,
    workouts,
)
from grindlog.config import Settings
from grindlog.database import Database
from grindlog.errors import register_exception_handlers
from grindlog.utils.time import utcnow

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build an application instance.

    Tests pass their own settings (and optionally a Database) so each test
    case gets an isolated store.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    database = database or Database(settings.database_url)
    if settings.auto_create_tables:
        database.create_all()

    app = FastAPI(title="GrindLog API")
    app.state.settings = settings
    app.state.database = database
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(login.router)
    app.include_router(users.router)
    app.include_router(workouts.router)
    app.include_router(diet.router)
    app.include_router(nutrition.router)
    app.include_router(supplements.router)
    app.include_router(routines.router)
    app.include_router(cardio.router)
    app.include_router(templates.router)
    app.include_router(onboarding.router)
    app.include_router(groups.router)
    app.include_router(progress.router)
    app.include_router(dashboard.router)
    app.include_router(admin.router)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "timestamp": utcnow().isoformat() + "Z"}

    logger.info("GrindLog API ready (environment=%s)", settings.environment)
    return app
