from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class RoutineCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str
    description: Optional[str] = None
    total_duration_minutes: Optional[int] = None
    items: List[Any] = []


class RoutineUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = None
    description: Optional[str] = None
    total_duration_minutes: Optional[int] = None
    items: Optional[List[Any]] = None
    is_active: Optional[bool] = None


class RoutineResponse(BaseModel):
    id: int
    name: str
    type: str
    description: Optional[str] = None
    total_duration_minutes: Optional[int] = None
    items: List[Any] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompletionCreate(CamelModel):
    items_completed: List[str] = []
    notes: Optional[str] = None


class CompletionResponse(BaseModel):
    id: int
    user_id: int
    routine_id: int
    items_completed: List[str] = []
    notes: Optional[str] = None
    completed_at: datetime
    routine_name: Optional[str] = None
    routine_type: Optional[str] = None

    class Config:
        from_attributes = True
