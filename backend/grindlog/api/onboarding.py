import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user
from grindlog.crud import user as crud_user
from grindlog.database import get_db, to_dict, transaction
from grindlog.errors import NotFoundError
from grindlog.models.exercise import Exercise
from grindlog.models.progress import BodyMeasurement
from grindlog.models.schedule import AiRecommendation, ScheduleDayExercise, WeeklySchedule
from grindlog.models.workout import WorkoutPlan
from grindlog.schemas.common import SuccessResponse
from grindlog.schemas.onboarding import (
    CompleteStep,
    OnboardingStatus,
    ProfileStep,
    RecommendationRequest,
    RecommendationResponse,
    ReorderRequest,
    ScheduleDayFull,
    ScheduleDayInput,
    ScheduleDayResponse,
    ScheduleExerciseCreate,
    ScheduleExerciseResponse,
    ScheduleExerciseUpdate,
)
from grindlog.utils.time import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])

DAY = Path(..., ge=0, le=6, description="0=Sunday .. 6=Saturday")


def current_user_row(db: Session, user_id: int):
    user = crud_user.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def schedule_rows(db: Session, user_id: int):
    return (
        db.query(WeeklySchedule, WorkoutPlan.name)
        .outerjoin(WorkoutPlan, WeeklySchedule.plan_id == WorkoutPlan.id)
        .filter(WeeklySchedule.user_id == user_id)
        .order_by(WeeklySchedule.day_of_week)
        .all()
    )


def exercise_rows(db: Session, user_id: int):
    """Schedule entries of a user joined with their exercise details."""
    return (
        db.query(ScheduleDayExercise, Exercise, WeeklySchedule.day_of_week)
        .join(Exercise, ScheduleDayExercise.exercise_id == Exercise.id)
        .join(WeeklySchedule, ScheduleDayExercise.schedule_id == WeeklySchedule.id)
        .filter(WeeklySchedule.user_id == user_id)
        .order_by(ScheduleDayExercise.order_index, ScheduleDayExercise.id)
    )


def entry_dict(entry: ScheduleDayExercise, exercise: Exercise) -> dict:
    return to_dict(
        entry,
        exercise_name=exercise.name,
        category=exercise.category,
        muscle_group=exercise.muscle_group,
        is_cardio=exercise.is_cardio,
    )


def owned_entry(db: Session, entry_id: int, user_id: int) -> ScheduleDayExercise:
    entry = (
        db.query(ScheduleDayExercise)
        .join(WeeklySchedule, ScheduleDayExercise.schedule_id == WeeklySchedule.id)
        .filter(ScheduleDayExercise.id == entry_id, WeeklySchedule.user_id == user_id)
        .first()
    )
    if entry is None:
        raise NotFoundError("Exercise entry not found")
    return entry


# --- Profile steps ---

@router.get("/status", response_model=OnboardingStatus)
def onboarding_status(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return current_user_row(db, current_user.id)


@router.post("/profile", response_model=SuccessResponse)
def save_profile(
    request: ProfileStep,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Store body basics; a weight, when given, becomes the first measurement."""
    user = current_user_row(db, current_user.id)
    with transaction(db):
        user.height_cm = request.height_cm
        user.fitness_goal = request.fitness_goal
        user.experience_level = request.experience_level
        if request.weight:
            db.add(
                BodyMeasurement(
                    user_id=current_user.id,
                    weight=request.weight,
                    notes="Initial weight from onboarding",
                )
            )
    return {"success": True}


@router.post("/complete", response_model=SuccessResponse)
def complete_onboarding(
    request: CompleteStep,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    user = current_user_row(db, current_user.id)
    user.onboarding_completed = True
    user.workouts_setup = request.workouts_setup
    user.menu_setup = request.menu_setup
    db.commit()
    logger.info("User %s completed onboarding", current_user.id)
    return {"success": True}


# --- Weekly schedule ---

@router.get("/schedule", response_model=List[ScheduleDayResponse])
def get_schedule(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return [to_dict(day, plan_name=plan_name) for day, plan_name in schedule_rows(db, current_user.id)]


@router.post("/schedule", response_model=ScheduleDayResponse)
def set_schedule_day(
    request: ScheduleDayInput,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Upsert one weekday; every field is overwritten."""
    day = (
        db.query(WeeklySchedule)
        .filter(WeeklySchedule.user_id == current_user.id, WeeklySchedule.day_of_week == request.day_of_week)
        .first()
    )
    if day is None:
        day = WeeklySchedule(user_id=current_user.id, day_of_week=request.day_of_week)
        db.add(day)

    day.name = request.name
    day.plan_id = request.plan_id
    day.is_rest_day = request.is_rest_day
    day.notes = request.notes
    day.updated_at = utcnow()
    db.commit()
    db.refresh(day)

    plan_name = db.query(WorkoutPlan.name).filter(WorkoutPlan.id == day.plan_id).scalar() if day.plan_id else None
    return to_dict(day, plan_name=plan_name)


@router.get("/schedule/full", response_model=List[ScheduleDayFull])
def get_full_schedule(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    by_day = {}
    for entry, exercise, day_of_week in exercise_rows(db, current_user.id).all():
        by_day.setdefault(day_of_week, []).append(entry_dict(entry, exercise))

    return [
        to_dict(day, plan_name=plan_name, exercises=by_day.get(day.day_of_week, []))
        for day, plan_name in schedule_rows(db, current_user.id)
    ]


@router.delete("/schedule/{day_of_week}", response_model=SuccessResponse)
def clear_schedule_day(
    day_of_week: int = DAY,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    day = (
        db.query(WeeklySchedule)
        .filter(WeeklySchedule.user_id == current_user.id, WeeklySchedule.day_of_week == day_of_week)
        .first()
    )
    if day is not None:
        db.delete(day)
        db.commit()
    return {"success": True}


@router.get("/schedule/{day_of_week}/exercises", response_model=List[ScheduleExerciseResponse])
def get_day_exercises(
    day_of_week: int = DAY,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    rows = exercise_rows(db, current_user.id).filter(WeeklySchedule.day_of_week == day_of_week).all()
    return [entry_dict(entry, exercise) for entry, exercise, _ in rows]


@router.post(
    "/schedule/{day_of_week}/exercises",
    response_model=ScheduleExerciseResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_day_exercise(
    request: ScheduleExerciseCreate,
    day_of_week: int = DAY,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Append an exercise to a weekday, creating the day on first use."""
    exercise = db.query(Exercise).filter(Exercise.id == request.exercise_id).first()
    if exercise is None:
        raise NotFoundError("Exercise not found")

    with transaction(db):
        day = (
            db.query(WeeklySchedule)
            .filter(WeeklySchedule.user_id == current_user.id, WeeklySchedule.day_of_week == day_of_week)
            .first()
        )
        if day is None:
            day = WeeklySchedule(user_id=current_user.id, day_of_week=day_of_week, name="Workout", is_rest_day=False)
            db.add(day)
            db.flush()

        next_order = (
            db.query(func.coalesce(func.max(ScheduleDayExercise.order_index), -1))
            .filter(ScheduleDayExercise.schedule_id == day.id)
            .scalar()
            + 1
        )
        entry = ScheduleDayExercise(schedule_id=day.id, order_index=next_order, **request.model_dump())
        db.add(entry)

    db.refresh(entry)
    return entry_dict(entry, exercise)


@router.patch("/schedule/exercises/{entry_id}", response_model=ScheduleExerciseResponse)
def update_day_exercise(
    entry_id: int,
    request: ScheduleExerciseUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    entry = owned_entry(db, entry_id, current_user.id)
    for field, value in request.model_dump(exclude_none=True).items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)

    exercise = db.query(Exercise).filter(Exercise.id == entry.exercise_id).first()
    return entry_dict(entry, exercise)


@router.delete("/schedule/exercises/{entry_id}", response_model=SuccessResponse)
def remove_day_exercise(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    entry = owned_entry(db, entry_id, current_user.id)
    db.delete(entry)
    db.commit()
    return {"success": True}


@router.patch("/schedule/{day_of_week}/reorder", response_model=SuccessResponse)
def reorder_day(
    request: ReorderRequest,
    day_of_week: int = DAY,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """
    Set `order_index` from the position of each entry id in the request.
    Ids that belong to another day or another user are ignored.
    """
    day = (
        db.query(WeeklySchedule)
        .filter(WeeklySchedule.user_id == current_user.id, WeeklySchedule.day_of_week == day_of_week)
        .first()
    )
    if day is None:
        raise NotFoundError("Schedule day not found")

    entries = {entry.id: entry for entry in day.exercises}
    with transaction(db):
        for index, entry_id in enumerate(request.exercise_ids):
            entry = entries.get(entry_id)
            if entry is not None:
                entry.order_index = index
    return {"success": True}


# --- Recommendations ---

@router.post("/ai-recommend", response_model=RecommendationResponse)
def request_recommendation(
    request: RecommendationRequest,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """
    Queue a recommendation request with a snapshot of the user's profile.
    Nothing generates recommendations yet, so the record stays pending.
    """
    user = current_user_row(db, current_user.id)
    latest = (
        db.query(BodyMeasurement)
        .filter(BodyMeasurement.user_id == current_user.id)
        .order_by(BodyMeasurement.measured_at.desc(), BodyMeasurement.id.desc())
        .first()
    )

    recommendation = AiRecommendation(
        user_id=current_user.id,
        type=request.type,
        request_data={
            "user_profile": {
                "height_cm": user.height_cm,
                "fitness_goal": user.fitness_goal,
                "experience_level": user.experience_level,
            },
            "latest_measurement": (
                {"weight": latest.weight, "body_fat_percentage": latest.body_fat_percentage} if latest else None
            ),
            "existing_data": request.existing_data,
            "requested_at": utcnow().isoformat(),
        },
    )
    db.add(recommendation)
    db.commit()
    db.refresh(recommendation)

    return {
        "id": recommendation.id,
        "type": recommendation.type,
        "status": recommendation.status,
        "message": "Recommendation request submitted",
        "created_at": recommendation.created_at,
    }
