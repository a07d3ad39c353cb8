from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class OnboardingStatus(BaseModel):
    height_cm: Optional[float] = None
    fitness_goal: Optional[str] = None
    experience_level: Optional[str] = None
    onboarding_completed: bool
    workouts_setup: bool
    menu_setup: bool

    class Config:
        from_attributes = True


class ProfileStep(CamelModel):
    height_cm: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    fitness_goal: Optional[str] = None
    experience_level: Optional[str] = None


class CompleteStep(CamelModel):
    workouts_setup: bool = False
    menu_setup: bool = False


class ScheduleDayInput(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6)
    name: Optional[str] = None
    plan_id: Optional[int] = None
    is_rest_day: bool = False
    notes: Optional[str] = None


class ScheduleExerciseCreate(CamelModel):
    exercise_id: int
    sets: Optional[int] = 3
    reps: Optional[int] = 10
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    intervals: Optional[int] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None


class ScheduleExerciseUpdate(CamelModel):
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    intervals: Optional[int] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None


class ScheduleExerciseResponse(BaseModel):
    id: int
    schedule_id: int
    exercise_id: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    intervals: Optional[int] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None
    order_index: int
    exercise_name: Optional[str] = None
    category: Optional[str] = None
    muscle_group: Optional[str] = None
    is_cardio: Optional[bool] = None

    class Config:
        from_attributes = True


class ScheduleDayResponse(BaseModel):
    id: int
    user_id: int
    day_of_week: int
    name: Optional[str] = None
    plan_id: Optional[int] = None
    is_rest_day: bool
    notes: Optional[str] = None
    plan_name: Optional[str] = None

    class Config:
        from_attributes = True


class ScheduleDayFull(ScheduleDayResponse):
    exercises: List[ScheduleExerciseResponse] = []


class ReorderRequest(CamelModel):
    exercise_ids: List[int]


class RecommendationRequest(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    existing_data: Optional[Any] = None


class RecommendationResponse(BaseModel):
    id: int
    type: str
    status: str
    message: str
    created_at: Optional[datetime] = None
