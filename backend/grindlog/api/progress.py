import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.database import get_db, to_dict, transaction
from grindlog.errors import NotFoundError
from grindlog.models.exercise import Exercise
from grindlog.models.progress import BodyMeasurement, ExerciseProgress, UserGoal
from grindlog.models.workout import ExerciseLog, WorkoutSession
from grindlog.schemas.common import MessageResponse
from grindlog.schemas.progress import (
    GoalCreate,
    GoalResponse,
    GoalUpdate,
    LastWeightsRequest,
    MeasurementCreate,
    MeasurementResponse,
    ProgressByName,
    ProgressCreate,
    ProgressOverview,
    ProgressResponse,
)
from grindlog.services.compliance import exercise_progression
from grindlog.services.stats_service import StatsService
from grindlog.utils.time import days_ago

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


# --- Body measurements ---

@router.post("/measurements", response_model=MeasurementResponse, status_code=status.HTTP_201_CREATED)
def log_measurement(
    request: MeasurementCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    measurement = BodyMeasurement(user_id=current_user.id, **request.model_dump())
    db.add(measurement)
    db.commit()
    db.refresh(measurement)
    return measurement


@router.get("/measurements", response_model=List[MeasurementResponse])
def measurement_history(
    limit: int = Query(QUERY_DEFAULTS.measurement_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return (
        db.query(BodyMeasurement)
        .filter(BodyMeasurement.user_id == current_user.id)
        .order_by(BodyMeasurement.measured_at.desc(), BodyMeasurement.id.desc())
        .limit(limit)
        .all()
    )


# --- Goals ---

@router.get("/goals", response_model=List[GoalResponse])
def list_goals(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    # Open goals first, then by deadline with undated goals last
    return (
        db.query(UserGoal)
        .filter(UserGoal.user_id == current_user.id)
        .order_by(UserGoal.achieved, UserGoal.deadline.is_(None), UserGoal.deadline, UserGoal.id)
        .all()
    )


@router.post("/goals", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    request: GoalCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    goal = UserGoal(user_id=current_user.id, **request.model_dump())
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


@router.patch("/goals/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: int,
    request: GoalUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    goal = db.query(UserGoal).filter(UserGoal.id == goal_id, UserGoal.user_id == current_user.id).first()
    if goal is None:
        raise NotFoundError("Goal not found")

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(goal, field, value)
    db.commit()
    db.refresh(goal)
    return goal


# --- Stats ---

@router.get("/stats")
def progress_stats(
    days: int = Query(QUERY_DEFAULTS.stats_days, ge=1, le=3650),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    return StatsService(db, settings.timezone).progress_stats(current_user.id, days)


# --- Session-based progression ---

@router.get("/exercise/{exercise_id}")
def exercise_progress(
    exercise_id: int,
    limit: int = Query(QUERY_DEFAULTS.exercise_log_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """
    Recent sets of one exercise across the caller's sessions, plus the
    heaviest set of each session date.
    """
    rows = (
        db.query(ExerciseLog, WorkoutSession.started_at)
        .join(WorkoutSession, ExerciseLog.session_id == WorkoutSession.id)
        .filter(WorkoutSession.user_id == current_user.id, ExerciseLog.exercise_id == exercise_id)
        .order_by(WorkoutSession.started_at.desc(), ExerciseLog.id)
        .limit(limit)
        .all()
    )

    logs = [to_dict(log, session_date=started_at) for log, started_at in rows]
    progression = exercise_progression(
        {"date": started_at.date(), "weight": log.weight, "reps": log.reps} for log, started_at in rows
    )
    return {"logs": logs, "progression": progression}


# --- Standalone progress entries ---

@router.post("/exercise/{exercise_id}/log", response_model=ProgressResponse, status_code=status.HTTP_201_CREATED)
def log_progress(
    exercise_id: int,
    request: ProgressCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    if db.query(Exercise.id).filter(Exercise.id == exercise_id).first() is None:
        raise NotFoundError("Exercise not found")

    entry = ExerciseProgress(user_id=current_user.id, exercise_id=exercise_id, **request.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.get("/exercise/{exercise_id}/history")
def progress_history(
    exercise_id: int,
    days: int = Query(QUERY_DEFAULTS.exercise_history_days, ge=1, le=3650),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Entries oldest first, with a cardio or strength summary depending on the exercise."""
    exercise = db.query(Exercise).filter(Exercise.id == exercise_id).first()
    if exercise is None:
        raise NotFoundError("Exercise not found")

    entries = (
        db.query(ExerciseProgress)
        .filter(
            ExerciseProgress.user_id == current_user.id,
            ExerciseProgress.exercise_id == exercise_id,
            ExerciseProgress.logged_at >= days_ago(days),
        )
        .order_by(ExerciseProgress.logged_at, ExerciseProgress.id)
        .all()
    )

    if exercise.is_cardio:
        summary = {
            "total_duration": sum(e.duration_seconds or 0 for e in entries),
            "total_distance": sum(e.distance_meters or 0 for e in entries),
            "sessions": len(entries),
        }
    else:
        summary = {
            "max_weight": max((e.weight or 0 for e in entries), default=0),
            "total_sets": sum(e.sets or 0 for e in entries),
            "sessions": len(entries),
        }

    return {
        "exercise": {"name": exercise.name, "is_cardio": exercise.is_cardio},
        "history": [ProgressResponse.model_validate(e).model_dump() for e in entries],
        "summary": summary,
    }


@router.get("/exercises/overview", response_model=List[ProgressOverview])
def progress_overview(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Latest entry per exercise with the number of entries logged for it."""
    rows = (
        db.query(ExerciseProgress, Exercise)
        .join(Exercise, ExerciseProgress.exercise_id == Exercise.id)
        .filter(ExerciseProgress.user_id == current_user.id)
        .order_by(ExerciseProgress.exercise_id, ExerciseProgress.logged_at.desc(), ExerciseProgress.id.desc())
        .all()
    )

    latest: Dict[int, dict] = {}
    counts: Dict[int, int] = {}
    for entry, exercise in rows:
        counts[entry.exercise_id] = counts.get(entry.exercise_id, 0) + 1
        if entry.exercise_id not in latest:
            latest[entry.exercise_id] = to_dict(
                entry,
                exercise_name=exercise.name,
                category=exercise.category,
                muscle_group=exercise.muscle_group,
                is_cardio=exercise.is_cardio,
            )

    return [{**row, "total_entries": counts[exercise_id]} for exercise_id, row in latest.items()]


@router.post("/exercises/last-weights")
def last_weights(
    request: LastWeightsRequest,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Most recent entry per exercise name, keyed by lower-cased name."""
    names = {name.lower() for name in request.exercise_names if name}
    if not names:
        return {}

    rows = (
        db.query(Exercise.name, ExerciseProgress)
        .join(ExerciseProgress, ExerciseProgress.exercise_id == Exercise.id)
        .filter(ExerciseProgress.user_id == current_user.id, func.lower(Exercise.name).in_(names))
        .order_by(ExerciseProgress.logged_at.desc(), ExerciseProgress.id.desc())
        .all()
    )

    result = {}
    for name, entry in rows:
        key = name.lower()
        if key not in result:
            result[key] = {
                "weight": entry.weight,
                "sets": entry.sets,
                "reps": entry.reps,
                "logged_at": entry.logged_at,
            }
    return result


@router.post("/exercises/log-by-name", response_model=ProgressResponse, status_code=status.HTTP_201_CREATED)
def log_progress_by_name(
    request: ProgressByName,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Log against an exercise found by case-insensitive name, creating a private one if none exists."""
    with transaction(db):
        exercise = (
            db.query(Exercise)
            .filter(func.lower(Exercise.name) == request.exercise_name.lower())
            .order_by(Exercise.id)
            .first()
        )
        if exercise is None:
            exercise = Exercise(
                name=request.exercise_name,
                category=request.category or "Strength",
                muscle_group=request.muscle_group or "Full Body",
                is_public=False,
                created_by=current_user.id,
            )
            db.add(exercise)
            db.flush()
            logger.info("Created exercise %s (%s) for user %s", exercise.id, exercise.name, current_user.id)

        entry = ExerciseProgress(
            user_id=current_user.id,
            exercise_id=exercise.id,
            weight=request.weight,
            sets=request.sets,
            reps=request.reps,
            notes=request.notes,
        )
        db.add(entry)

    db.refresh(entry)
    return entry


@router.delete("/exercise-log/{entry_id}", response_model=MessageResponse)
def delete_progress_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    deleted = (
        db.query(ExerciseProgress)
        .filter(ExerciseProgress.id == entry_id, ExerciseProgress.user_id == current_user.id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFoundError("Progress entry not found")
    db.commit()
    return {"message": "Progress entry deleted"}


@router.delete("/exercise/{exercise_id}/clear", response_model=MessageResponse)
def clear_exercise_progress(
    exercise_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    deleted = (
        db.query(ExerciseProgress)
        .filter(ExerciseProgress.exercise_id == exercise_id, ExerciseProgress.user_id == current_user.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return {"message": f"Deleted {deleted} progress entries"}


@router.delete("/exercises/clear-all", response_model=MessageResponse)
def clear_all_progress(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    deleted = (
        db.query(ExerciseProgress)
        .filter(ExerciseProgress.user_id == current_user.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("User %s cleared %d progress entries", current_user.id, deleted)
    return {"message": f"Deleted {deleted} progress entries"}
