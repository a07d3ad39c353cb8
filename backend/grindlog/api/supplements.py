import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.database import get_db, to_dict
from grindlog.errors import NotFoundError
from grindlog.models.supplement import Supplement, SupplementLog
from grindlog.schemas.common import MessageResponse
from grindlog.schemas.supplement import (
    StreakResponse,
    SupplementCreate,
    SupplementLogCreate,
    SupplementLogResponse,
    SupplementResponse,
    SupplementStatus,
    SupplementUpdate,
    WeeklySupplementDay,
)
from grindlog.services.stats_service import StatsService
from grindlog.utils.time import to_utc_naive, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/supplements", tags=["supplements"])


def visible_supplement(db: Session, supplement_id: int, user_id: int) -> Optional[Supplement]:
    return (
        db.query(Supplement)
        .filter(
            Supplement.id == supplement_id,
            or_(Supplement.user_id == user_id, Supplement.is_global.is_(True)),
            Supplement.is_active.is_(True),
        )
        .first()
    )


def owned_supplement(db: Session, supplement_id: int, user_id: int) -> Supplement:
    """Global supplements are read-only for everyone."""
    supplement = db.query(Supplement).filter(Supplement.id == supplement_id, Supplement.user_id == user_id).first()
    if supplement is None:
        raise NotFoundError("Supplement not found or not owned by user")
    return supplement


# --- Log routes first so "/logs/..." never matches "/{supplement_id}" ---

@router.get("/logs/history", response_model=List[SupplementLogResponse])
def log_history(
    limit: int = Query(QUERY_DEFAULTS.supplement_log_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    offset: int = Query(0, ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    supplement_id: Optional[int] = Query(None, alias="supplementId"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = (
        db.query(SupplementLog, Supplement.name, Supplement.timing_notes)
        .join(Supplement, SupplementLog.supplement_id == Supplement.id)
        .filter(SupplementLog.user_id == current_user.id)
    )
    if start_date:
        query = query.filter(SupplementLog.taken_at >= to_utc_naive(start_date))
    if end_date:
        query = query.filter(SupplementLog.taken_at <= to_utc_naive(end_date))
    if supplement_id:
        query = query.filter(SupplementLog.supplement_id == supplement_id)

    rows = query.order_by(SupplementLog.taken_at.desc(), SupplementLog.id.desc()).limit(limit).offset(offset).all()
    return [to_dict(log, supplement_name=name, timing_notes=timing) for log, name, timing in rows]


@router.get("/logs/today", response_model=List[SupplementStatus])
def today_status(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    return StatsService(db, settings.timezone).supplement_status_today(current_user.id)


@router.get("/logs/weekly", response_model=List[WeeklySupplementDay])
def weekly_compliance(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """Doses taken per day over the last week against the number of tracked supplements."""
    return StatsService(db, settings.timezone).weekly_supplements(current_user.id)


@router.get("/logs/streak", response_model=StreakResponse)
def supplement_streak(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    stats = StatsService(db, settings.timezone)
    return {"streak": stats.streak(stats.supplement_days(current_user.id))}


@router.delete("/logs/{log_id}", response_model=MessageResponse)
def delete_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    log = db.query(SupplementLog).filter(SupplementLog.id == log_id, SupplementLog.user_id == current_user.id).first()
    if log is None:
        raise NotFoundError("Log not found")
    db.delete(log)
    db.commit()
    return {"message": "Log deleted"}


# --- Supplements ---

@router.get("", response_model=List[SupplementResponse])
def list_supplements(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    return StatsService(db, settings.timezone).active_supplements(current_user.id)


@router.get("/{supplement_id}", response_model=SupplementResponse)
def get_supplement(
    supplement_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    supplement = visible_supplement(db, supplement_id, current_user.id)
    if supplement is None:
        raise NotFoundError("Supplement not found")
    return supplement


@router.post("", response_model=SupplementResponse, status_code=status.HTTP_201_CREATED)
def create_supplement(
    request: SupplementCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    supplement = Supplement(user_id=current_user.id, **request.model_dump())
    db.add(supplement)
    db.commit()
    db.refresh(supplement)
    return supplement


@router.put("/{supplement_id}", response_model=SupplementResponse)
def update_supplement(
    supplement_id: int,
    request: SupplementUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    supplement = owned_supplement(db, supplement_id, current_user.id)
    for field, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(supplement, field, value)
    db.commit()
    db.refresh(supplement)
    return supplement


@router.delete("/{supplement_id}", response_model=MessageResponse)
def delete_supplement(
    supplement_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    # Soft delete; the log history stays intact
    supplement = owned_supplement(db, supplement_id, current_user.id)
    supplement.is_active = False
    db.commit()
    logger.info("User %s deactivated supplement %s", current_user.id, supplement_id)
    return {"message": "Supplement deleted"}


@router.post("/{supplement_id}/log", response_model=SupplementLogResponse, status_code=status.HTTP_201_CREATED)
def log_intake(
    supplement_id: int,
    request: SupplementLogCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    supplement = visible_supplement(db, supplement_id, current_user.id)
    if supplement is None:
        raise NotFoundError("Supplement not found")

    log = SupplementLog(
        user_id=current_user.id,
        supplement_id=supplement.id,
        dosage=supplement.dosage,
        notes=request.notes,
        taken_at=to_utc_naive(request.taken_at) if request.taken_at else utcnow(),
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return to_dict(log, supplement_name=supplement.name)
