from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class NutritionTargetUpdate(CamelModel):
    daily_calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)


class NutritionTargetResponse(BaseModel):
    daily_calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    is_default: bool = False
    id: Optional[int] = None
    user_id: Optional[int] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealItemInput(CamelModel):
    ingredient: Optional[str] = None
    amount: Optional[str] = None
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0
    calories: float = 0
    notes: Optional[str] = None


class MealCreate(CamelModel):
    meal_type: str
    items: List[MealItemInput] = []
    notes: Optional[str] = None
    logged_at: Optional[datetime] = None


class MealUpdate(CamelModel):
    meal_type: Optional[str] = None
    items: Optional[List[MealItemInput]] = None
    notes: Optional[str] = None


class MealItemResponse(BaseModel):
    id: int
    meal_id: int
    ingredient: Optional[str] = None
    amount: Optional[str] = None
    protein_g: Optional[float] = 0
    carbs_g: Optional[float] = 0
    fat_g: Optional[float] = 0
    calories: Optional[float] = 0
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class MealResponse(BaseModel):
    id: int
    user_id: int
    meal_type: str
    logged_at: datetime
    total_calories: Optional[float] = 0
    protein_g: Optional[float] = 0
    carbs_g: Optional[float] = 0
    fat_g: Optional[float] = 0
    notes: Optional[str] = None
    items: List[MealItemResponse] = []

    class Config:
        from_attributes = True


class MealTemplateItemResponse(BaseModel):
    id: int
    ingredient: Optional[str] = None
    amount: Optional[str] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    calories: Optional[float] = None
    notes: Optional[str] = None
    order_index: int

    class Config:
        from_attributes = True


class MealTemplateResponse(BaseModel):
    id: int
    meal_type: str
    option_name: Optional[str] = None
    total_calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    timing_notes: Optional[str] = None
    order_index: int
    items: List[MealTemplateItemResponse] = []

    class Config:
        from_attributes = True


class NutritionPlanResponse(BaseModel):
    id: int
    name: str
    day_type: str
    description: Optional[str] = None
    daily_calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    meals_count: Optional[int] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NutritionPlanDetail(NutritionPlanResponse):
    meals: Dict[str, List[MealTemplateResponse]] = {}
