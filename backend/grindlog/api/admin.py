import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_settings, require_admin
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.crud import group as crud_group
from grindlog.crud import user as crud_user
from grindlog.database import get_db, to_dict
from grindlog.errors import BadRequestError, NotFoundError
from grindlog.models.user import USER_ROLES
from grindlog.schemas.group import AdminGroupRow
from grindlog.schemas.user import AdminUserPage, RoleUpdate, UserResponse
from grindlog.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

PAGE_LIMIT = Query(QUERY_DEFAULTS.admin_page_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit)
STATS_DAYS = Query(QUERY_DEFAULTS.stats_days, ge=1, le=3650)


# --- Statistics ---

@router.get("/stats")
def overview(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return StatsService(db, settings.timezone).overview()


@router.get("/stats/growth")
def user_growth(
    days: int = STATS_DAYS,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """New registrations per local day."""
    return StatsService(db, settings.timezone).user_growth(days)


@router.get("/stats/activity")
def activity(
    days: int = STATS_DAYS,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return StatsService(db, settings.timezone).activity(days)


@router.get("/stats/exercises")
def popular_exercises(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return StatsService(db, settings.timezone).popular_exercises(QUERY_DEFAULTS.popular_exercise_limit)


# --- Users ---

@router.get("/users", response_model=AdminUserPage)
def list_users(
    limit: int = PAGE_LIMIT,
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    rows = crud_user.search_users(db, search=search, skip=offset, limit=limit)
    return {
        "users": [to_dict(user, workout_count=count or 0) for user, count in rows],
        "total": crud_user.count_users(db),
        "limit": limit,
        "offset": offset,
    }


@router.patch("/users/{user_id}/role", response_model=UserResponse)
def update_role(
    user_id: int,
    request: RoleUpdate,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin),
):
    if request.role not in USER_ROLES:
        raise BadRequestError("Invalid role")

    user = crud_user.set_role(db, user_id, request.role)
    if user is None:
        raise NotFoundError("User not found")
    logger.info("Admin %s set role of user %s to %s", admin.id, user_id, request.role)
    return user


# --- Groups ---

@router.get("/groups", response_model=List[AdminGroupRow])
def list_groups(
    limit: int = PAGE_LIMIT,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    rows = crud_group.list_all_groups(db, skip=offset, limit=limit)
    return [
        to_dict(group, member_count=count or 0, created_by_username=username)
        for group, count, username in rows
    ]


# --- System ---

@router.get("/health")
def system_health(request: Request, db: Session = Depends(get_db)):
    server_time = db.execute(select(func.current_timestamp())).scalar()
    return {
        "status": "healthy",
        "database": "connected",
        "server_time": server_time,
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
    }
