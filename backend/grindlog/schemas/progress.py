from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class MeasurementCreate(CamelModel):
    weight: Optional[float] = Field(None, gt=0)
    body_fat_percentage: Optional[float] = Field(None, ge=0, le=100)
    muscle_mass: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    biceps: Optional[float] = None
    thighs: Optional[float] = None
    notes: Optional[str] = None


class MeasurementResponse(BaseModel):
    id: int
    user_id: int
    weight: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    muscle_mass: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    biceps: Optional[float] = None
    thighs: Optional[float] = None
    notes: Optional[str] = None
    measured_at: datetime

    class Config:
        from_attributes = True


class GoalCreate(CamelModel):
    goal_type: str = Field(..., min_length=1, max_length=50)
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    deadline: Optional[date] = None


class GoalUpdate(CamelModel):
    current_value: Optional[float] = None
    achieved: Optional[bool] = None


class GoalResponse(BaseModel):
    id: int
    user_id: int
    goal_type: str
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    deadline: Optional[date] = None
    achieved: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProgressCreate(CamelModel):
    weight: Optional[float] = Field(None, ge=0)
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)
    distance_meters: Optional[float] = Field(None, ge=0)
    intervals: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class ProgressByName(CamelModel):
    exercise_name: str = Field(..., min_length=1, max_length=100)
    weight: Optional[float] = Field(None, ge=0)
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    category: Optional[str] = None
    muscle_group: Optional[str] = None


class ProgressResponse(BaseModel):
    id: int
    user_id: int
    exercise_id: int
    weight: Optional[float] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    distance_meters: Optional[float] = None
    intervals: Optional[int] = None
    notes: Optional[str] = None
    logged_at: datetime

    class Config:
        from_attributes = True


class ProgressOverview(ProgressResponse):
    exercise_name: str
    category: Optional[str] = None
    muscle_group: Optional[str] = None
    is_cardio: bool
    total_entries: int


class LastWeightsRequest(CamelModel):
    exercise_names: List[str] = []
