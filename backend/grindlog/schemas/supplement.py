from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class SupplementCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    timing_notes: Optional[str] = None
    description: Optional[str] = None


class SupplementUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    timing_notes: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class SupplementResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    timing_notes: Optional[str] = None
    description: Optional[str] = None
    is_global: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SupplementLogCreate(CamelModel):
    notes: Optional[str] = None
    taken_at: Optional[datetime] = None


class SupplementLogResponse(BaseModel):
    id: int
    user_id: int
    supplement_id: int
    dosage: Optional[str] = None
    notes: Optional[str] = None
    taken_at: datetime
    supplement_name: Optional[str] = None
    timing_notes: Optional[str] = None

    class Config:
        from_attributes = True


class SupplementStatus(BaseModel):
    """Today's progress for one supplement."""

    supplement: SupplementResponse
    today_logs: List[SupplementLogResponse]
    doses_logged: int
    expected_doses: int
    complete: bool


class WeeklySupplementDay(BaseModel):
    date: str
    day: str
    taken: int
    expected: int


class StreakResponse(BaseModel):
    streak: int
