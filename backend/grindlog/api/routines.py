from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.database import get_db, to_dict
from grindlog.errors import BadRequestError, NotFoundError
from grindlog.models.routine import ROUTINE_TYPES, Routine, RoutineCompletion
from grindlog.schemas.routine import CompletionCreate, CompletionResponse, RoutineCreate, RoutineResponse, RoutineUpdate
from grindlog.schemas.supplement import StreakResponse
from grindlog.services.stats_service import StatsService
from grindlog.utils.time import day_bounds, local_today, to_utc_naive

router = APIRouter(prefix="/api/routines", tags=["routines"])


def check_type(routine_type: Optional[str]) -> None:
    if routine_type is not None and routine_type not in ROUTINE_TYPES:
        raise BadRequestError("Type must be morning or evening")


def active_routine(db: Session, routine_id: int) -> Routine:
    routine = db.query(Routine).filter(Routine.id == routine_id, Routine.is_active.is_(True)).first()
    if routine is None:
        raise NotFoundError("Routine not found")
    return routine


def completions_query(db: Session, user_id: int):
    return (
        db.query(RoutineCompletion, Routine.name, Routine.type)
        .join(Routine, RoutineCompletion.routine_id == Routine.id)
        .filter(RoutineCompletion.user_id == user_id)
    )


# --- Completions ---

@router.get("/completions/history", response_model=List[CompletionResponse])
def completion_history(
    limit: int = Query(QUERY_DEFAULTS.routine_completion_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    offset: int = Query(0, ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = completions_query(db, current_user.id)
    if start_date:
        query = query.filter(RoutineCompletion.completed_at >= to_utc_naive(start_date))
    if end_date:
        query = query.filter(RoutineCompletion.completed_at <= to_utc_naive(end_date))

    rows = (
        query.order_by(RoutineCompletion.completed_at.desc(), RoutineCompletion.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [to_dict(c, routine_name=name, routine_type=kind) for c, name, kind in rows]


@router.get("/completions/today", response_model=List[CompletionResponse])
def completions_today(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    start, end = day_bounds(local_today(settings.timezone), settings.timezone)
    rows = (
        completions_query(db, current_user.id)
        .filter(RoutineCompletion.completed_at >= start, RoutineCompletion.completed_at < end)
        .order_by(RoutineCompletion.completed_at)
        .all()
    )
    return [to_dict(c, routine_name=name, routine_type=kind) for c, name, kind in rows]


@router.get("/completions/streak", response_model=StreakResponse)
def completion_streak(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    stats = StatsService(db, settings.timezone)
    return {"streak": stats.streak(stats.routine_days(current_user.id))}


# --- Routines ---

@router.get("", response_model=List[RoutineResponse])
def list_routines(
    type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = db.query(Routine).filter(Routine.is_active.is_(True))
    # Unknown types are ignored rather than rejected
    if type in ROUTINE_TYPES:
        query = query.filter(Routine.type == type)
    return query.order_by(Routine.type, Routine.name).all()


@router.get("/{routine_id}", response_model=RoutineResponse)
def get_routine(
    routine_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return active_routine(db, routine_id)


@router.post("", response_model=RoutineResponse, status_code=status.HTTP_201_CREATED)
def create_routine(
    request: RoutineCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    check_type(request.type)
    routine = Routine(**request.model_dump())
    db.add(routine)
    db.commit()
    db.refresh(routine)
    return routine


@router.put("/{routine_id}", response_model=RoutineResponse)
def update_routine(
    routine_id: int,
    request: RoutineUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    check_type(request.type)
    routine = db.query(Routine).filter(Routine.id == routine_id).first()
    if routine is None:
        raise NotFoundError("Routine not found")

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(routine, field, value)
    db.commit()
    db.refresh(routine)
    return routine


@router.post("/{routine_id}/complete", response_model=CompletionResponse, status_code=status.HTTP_201_CREATED)
def complete_routine(
    routine_id: int,
    request: CompletionCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    routine = active_routine(db, routine_id)
    completion = RoutineCompletion(
        user_id=current_user.id,
        routine_id=routine.id,
        items_completed=request.items_completed,
        notes=request.notes,
    )
    db.add(completion)
    db.commit()
    db.refresh(completion)
    return to_dict(completion, routine_name=routine.name, routine_type=routine.type)
