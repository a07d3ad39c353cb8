from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class FoodItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    brand: Optional[str] = None
    serving_size: Optional[str] = None
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    is_public: bool = False


class FoodItemResponse(BaseModel):
    id: int
    name: str
    brand: Optional[str] = None
    serving_size: Optional[str] = None
    calories: Optional[float] = 0
    protein: Optional[float] = 0
    carbs: Optional[float] = 0
    fat: Optional[float] = 0
    fiber: Optional[float] = 0
    is_public: bool
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DietLogCreate(CamelModel):
    food_item_id: Optional[int] = None
    custom_name: Optional[str] = None
    servings: float = Field(1, gt=0)
    meal_type: Optional[str] = None
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class DietLogResponse(BaseModel):
    id: int
    user_id: int
    food_item_id: Optional[int] = None
    custom_name: Optional[str] = None
    servings: Optional[float] = None
    meal_type: Optional[str] = None
    calories: Optional[float] = 0
    protein: Optional[float] = 0
    carbs: Optional[float] = 0
    fat: Optional[float] = 0
    logged_at: datetime
    food_name: Optional[str] = None
    brand: Optional[str] = None

    class Config:
        from_attributes = True


class DietSummary(BaseModel):
    date: str
    meals_logged: int
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float


class QuickSupplementLog(CamelModel):
    supplement_id: int
    dosage: Optional[str] = None
