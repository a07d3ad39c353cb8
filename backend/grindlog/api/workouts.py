import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user
from grindlog.config import QUERY_DEFAULTS
from grindlog.database import get_db, to_dict, transaction
from grindlog.errors import BadRequestError, NotFoundError
from grindlog.models.exercise import Exercise
from grindlog.models.workout import CardioSession, ExerciseLog, WorkoutPlan, WorkoutPlanExercise, WorkoutSession
from grindlog.schemas.workout import (
    CardioSessionCreate,
    CardioSessionResponse,
    ExerciseCreate,
    ExerciseLogCreate,
    ExerciseLogResponse,
    ExerciseResponse,
    SessionCreate,
    SessionListItem,
    SessionResponse,
    WorkoutPlanCreate,
    WorkoutPlanResponse,
)
from grindlog.utils.time import to_utc_naive, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["workouts"])

PAGE_LIMIT = Query(QUERY_DEFAULTS.session_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit)
PAGE_OFFSET = Query(0, ge=0)


def visible_exercises(db: Session, user_id: int):
    return db.query(Exercise).filter(or_(Exercise.is_public.is_(True), Exercise.created_by == user_id))


def get_owned_session(db: Session, session_id: int, user_id: int) -> WorkoutSession:
    session = db.query(WorkoutSession).filter(
        WorkoutSession.id == session_id, WorkoutSession.user_id == user_id
    ).first()
    if session is None:
        raise NotFoundError("Session not found")
    return session


# --- Exercises ---

@router.get("/exercises", response_model=List[ExerciseResponse])
def list_exercises(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Public exercises plus the ones the caller created."""
    exercises = visible_exercises(db, current_user.id).order_by(Exercise.name).all()
    return [to_dict(ex, typical_section=ex.typical_section or "exercise") for ex in exercises]


@router.post("/exercises", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
def create_exercise(
    request: ExerciseCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    exercise = Exercise(**request.model_dump(), created_by=current_user.id)
    db.add(exercise)
    db.commit()
    db.refresh(exercise)
    return exercise


# --- Plans ---

@router.get("/plans", response_model=List[WorkoutPlanResponse])
def list_plans(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    exercise_count = (
        db.query(func.count(WorkoutPlanExercise.id))
        .filter(WorkoutPlanExercise.plan_id == WorkoutPlan.id)
        .correlate(WorkoutPlan)
        .scalar_subquery()
    )
    rows = (
        db.query(WorkoutPlan, exercise_count)
        .filter(or_(WorkoutPlan.user_id == current_user.id, WorkoutPlan.is_public.is_(True)))
        .order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())
        .all()
    )
    return [to_dict(plan, exercise_count=count or 0) for plan, count in rows]


@router.post("/plans", response_model=WorkoutPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    request: WorkoutPlanCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """
    Create a plan and its ordered exercise list in one transaction.
    If any exercise is rejected nothing is stored.
    """
    with transaction(db):
        plan = WorkoutPlan(
            user_id=current_user.id,
            name=request.name,
            description=request.description,
            is_public=request.is_public,
        )
        db.add(plan)
        db.flush()

        for index, item in enumerate(request.exercises):
            if visible_exercises(db, current_user.id).filter(Exercise.id == item.exercise_id).first() is None:
                raise BadRequestError(f"Exercise {item.exercise_id} not found")
            db.add(
                WorkoutPlanExercise(
                    plan_id=plan.id,
                    exercise_id=item.exercise_id,
                    sets=item.sets,
                    reps=item.reps,
                    duration_minutes=item.duration_minutes,
                    notes=item.notes,
                    order_index=index,
                )
            )

    db.refresh(plan)
    logger.info("User %s created plan %s with %d exercises", current_user.id, plan.id, len(request.exercises))
    return to_dict(plan, exercise_count=len(request.exercises))


# --- Sessions ---

@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def start_session(
    request: SessionCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    session = WorkoutSession(
        user_id=current_user.id,
        plan_id=request.plan_id,
        name=request.name,
        notes=request.notes,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@router.get("/sessions", response_model=List[SessionListItem])
def list_sessions(
    limit: int = PAGE_LIMIT,
    offset: int = PAGE_OFFSET,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    log_count = (
        db.query(func.count(ExerciseLog.id))
        .filter(ExerciseLog.session_id == WorkoutSession.id)
        .correlate(WorkoutSession)
        .scalar_subquery()
    )
    rows = (
        db.query(WorkoutSession, WorkoutPlan.name, log_count)
        .outerjoin(WorkoutPlan, WorkoutSession.plan_id == WorkoutPlan.id)
        .filter(WorkoutSession.user_id == current_user.id)
        .order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [to_dict(session, plan_name=plan_name, exercise_count=count or 0) for session, plan_name, count in rows]


@router.post("/sessions/{session_id}/log", response_model=ExerciseLogResponse, status_code=status.HTTP_201_CREATED)
def log_set(
    session_id: int,
    request: ExerciseLogCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    get_owned_session(db, session_id, current_user.id)

    log = ExerciseLog(session_id=session_id, **request.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


@router.patch("/sessions/{session_id}/end", response_model=SessionResponse)
def end_session(
    session_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    session = get_owned_session(db, session_id, current_user.id)
    session.ended_at = utcnow()
    db.commit()
    db.refresh(session)
    return session


# --- Free-form cardio ---

@router.post("/cardio", response_model=CardioSessionResponse, status_code=status.HTTP_201_CREATED)
def log_cardio_session(
    request: CardioSessionCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    data = request.model_dump(exclude={"session_date"})
    session = CardioSession(
        user_id=current_user.id,
        session_date=to_utc_naive(request.session_date) if request.session_date else utcnow(),
        **data,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@router.get("/cardio", response_model=List[CardioSessionResponse])
def list_cardio_sessions(
    limit: int = PAGE_LIMIT,
    offset: int = PAGE_OFFSET,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    rows = (
        db.query(CardioSession, Exercise.name)
        .outerjoin(Exercise, CardioSession.exercise_id == Exercise.id)
        .filter(CardioSession.user_id == current_user.id)
        .order_by(CardioSession.session_date.desc(), CardioSession.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [to_dict(session, exercise_name=name) for session, name in rows]
