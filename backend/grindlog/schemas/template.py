from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class TemplateCreate(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6)
    day_name: Optional[str] = None
    section: Optional[str] = None
    exercise: str = Field(..., min_length=1, max_length=100)
    sets_reps: Optional[str] = None
    intensity: Optional[str] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None
    order_index: int = 0


class TemplateUpdate(CamelModel):
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    day_name: Optional[str] = None
    section: Optional[str] = None
    exercise: Optional[str] = Field(None, min_length=1, max_length=100)
    sets_reps: Optional[str] = None
    intensity: Optional[str] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None


class TemplateResponse(BaseModel):
    id: int
    day_of_week: int
    day_name: Optional[str] = None
    section: Optional[str] = None
    exercise: str
    sets_reps: Optional[str] = None
    intensity: Optional[str] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None
    order_index: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WeeklyTemplates(BaseModel):
    weekly_plan: Dict[int, List[TemplateResponse]]
    day_names: Dict[int, Optional[str]]
