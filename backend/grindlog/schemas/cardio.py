from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class ProtocolCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    modality: Optional[str] = None
    description: Optional[str] = None
    total_minutes: Optional[int] = None
    frequency: Optional[str] = None
    hr_zone_target: Optional[str] = None
    instructions: Optional[str] = None
    science_notes: Optional[str] = None


class ProtocolUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    modality: Optional[str] = None
    description: Optional[str] = None
    total_minutes: Optional[int] = None
    frequency: Optional[str] = None
    hr_zone_target: Optional[str] = None
    instructions: Optional[str] = None
    science_notes: Optional[str] = None
    is_active: Optional[bool] = None


class ProtocolResponse(BaseModel):
    id: int
    name: str
    modality: Optional[str] = None
    description: Optional[str] = None
    total_minutes: Optional[int] = None
    frequency: Optional[str] = None
    hr_zone_target: Optional[str] = None
    instructions: Optional[str] = None
    science_notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProtocolLogCreate(CamelModel):
    protocol_id: int
    duration_minutes: Optional[int] = Field(None, ge=0)
    avg_heart_rate: Optional[int] = Field(None, ge=0)
    max_heart_rate: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class ProtocolLogResponse(BaseModel):
    id: int
    user_id: int
    protocol_id: int
    duration_minutes: Optional[int] = None
    avg_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    calories_burned: Optional[float] = None
    notes: Optional[str] = None
    completed_at: datetime
    protocol_name: Optional[str] = None
    modality: Optional[str] = None
    hr_zone_target: Optional[str] = None

    class Config:
        from_attributes = True


class WeeklyCardioSummary(BaseModel):
    total_sessions: int
    total_minutes: int
    avg_heart_rate: Optional[float] = None
    total_calories: float


class DayProtocol(BaseModel):
    day: int
    protocol_name: str
    description: str
    protocol: Optional[ProtocolResponse] = None
