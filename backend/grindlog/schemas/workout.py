from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class ExerciseCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = None
    muscle_group: Optional[str] = None
    description: Optional[str] = None
    is_cardio: bool = False
    is_public: bool = False


class ExerciseResponse(BaseModel):
    id: int
    name: str
    category: Optional[str] = None
    muscle_group: Optional[str] = None
    description: Optional[str] = None
    is_cardio: bool
    is_public: bool
    created_by: Optional[int] = None
    created_at: datetime
    typical_section: Optional[str] = "exercise"

    class Config:
        from_attributes = True


class PlanExerciseInput(CamelModel):
    exercise_id: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration_minutes: Optional[int] = None
    notes: Optional[str] = None


class WorkoutPlanCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    is_public: bool = False
    exercises: List[PlanExerciseInput] = []


class WorkoutPlanResponse(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    is_public: bool
    created_at: datetime
    exercise_count: int = 0

    class Config:
        from_attributes = True


class SessionCreate(CamelModel):
    plan_id: Optional[int] = None
    name: Optional[str] = None
    notes: Optional[str] = None


class SessionResponse(BaseModel):
    id: int
    user_id: int
    plan_id: Optional[int] = None
    name: Optional[str] = None
    notes: Optional[str] = None
    started_at: datetime
    ended_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SessionListItem(SessionResponse):
    plan_name: Optional[str] = None
    exercise_count: int = 0


class ExerciseLogCreate(CamelModel):
    exercise_id: int
    set_number: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    distance_meters: Optional[float] = None
    notes: Optional[str] = None


class ExerciseLogResponse(BaseModel):
    id: int
    session_id: int
    exercise_id: int
    set_number: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    distance_meters: Optional[float] = None
    notes: Optional[str] = None
    logged_at: datetime

    class Config:
        from_attributes = True


class CardioSessionCreate(CamelModel):
    exercise_id: Optional[int] = None
    duration_minutes: Optional[int] = None
    distance_km: Optional[float] = None
    calories_burned: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    notes: Optional[str] = None
    session_date: Optional[datetime] = None


class CardioSessionResponse(BaseModel):
    id: int
    user_id: int
    exercise_id: Optional[int] = None
    duration_minutes: Optional[int] = None
    distance_km: Optional[float] = None
    calories_burned: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    notes: Optional[str] = None
    session_date: datetime
    exercise_name: Optional[str] = None

    class Config:
        from_attributes = True
