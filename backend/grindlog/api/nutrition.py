import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import case
from sqlalchemy.orm import Session, selectinload

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import Settings
from grindlog.database import get_db, transaction
from grindlog.errors import BadRequestError, NotFoundError
from grindlog.models.nutrition import DAY_TYPES, MEAL_TYPES, Meal, MealItem, MealTemplate, NutritionPlan, NutritionTarget
from grindlog.schemas.common import MessageResponse
from grindlog.schemas.nutrition import (
    MealCreate,
    MealItemInput,
    MealResponse,
    MealUpdate,
    NutritionPlanDetail,
    NutritionPlanResponse,
    NutritionTargetResponse,
    NutritionTargetUpdate,
)
from grindlog.services.compliance import nutrition_remaining
from grindlog.utils.time import day_bounds, local_date, local_today, to_utc_naive, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])

DEFAULT_TARGETS = {"daily_calories": 3200, "protein_g": 180, "carbs_g": 350, "fat_g": 80}


def active_targets(db: Session, user_id: int) -> Optional[NutritionTarget]:
    return (
        db.query(NutritionTarget)
        .filter(NutritionTarget.user_id == user_id, NutritionTarget.is_active.is_(True))
        .first()
    )


def validate_meal_type(meal_type: Optional[str]) -> None:
    if meal_type is not None and meal_type not in MEAL_TYPES:
        raise BadRequestError(f"Invalid meal type. Must be one of: {', '.join(MEAL_TYPES)}")


def apply_items(meal: Meal, items: List[MealItemInput]) -> None:
    """Replace the meal's items and recompute its totals from them."""
    meal.items = [MealItem(**item.model_dump()) for item in items]
    meal.total_calories = sum(item.calories or 0 for item in items)
    meal.protein_g = sum(item.protein_g or 0 for item in items)
    meal.carbs_g = sum(item.carbs_g or 0 for item in items)
    meal.fat_g = sum(item.fat_g or 0 for item in items)


def owned_meal(db: Session, meal_id: int, user_id: int) -> Meal:
    meal = db.query(Meal).filter(Meal.id == meal_id, Meal.user_id == user_id).first()
    if meal is None:
        raise NotFoundError("Meal not found")
    return meal


# --- Targets ---

@router.get("/targets", response_model=NutritionTargetResponse)
def get_targets(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    targets = active_targets(db, current_user.id)
    if targets is None:
        return {**DEFAULT_TARGETS, "is_default": True}
    return targets


@router.put("/targets", response_model=NutritionTargetResponse)
def set_targets(
    request: NutritionTargetUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Upsert; fields left out keep their stored value."""
    targets = db.query(NutritionTarget).filter(NutritionTarget.user_id == current_user.id).first()
    if targets is None:
        targets = NutritionTarget(user_id=current_user.id)
        db.add(targets)

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(targets, field, value)
    targets.updated_at = utcnow()

    db.commit()
    db.refresh(targets)
    return targets


# --- Meals ---

@router.post("/meals", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def log_meal(
    request: MealCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    validate_meal_type(request.meal_type)

    with transaction(db):
        meal = Meal(
            user_id=current_user.id,
            meal_type=request.meal_type,
            notes=request.notes,
            logged_at=to_utc_naive(request.logged_at) if request.logged_at else utcnow(),
        )
        apply_items(meal, request.items)
        db.add(meal)

    db.refresh(meal)
    logger.info("User %s logged %s with %d items", current_user.id, meal.meal_type, len(request.items))
    return meal


@router.get("/meals", response_model=List[MealResponse])
def list_meals(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    start, end = day_bounds(day or local_today(settings.timezone), settings.timezone)
    return (
        db.query(Meal)
        .options(selectinload(Meal.items))
        .filter(Meal.user_id == current_user.id, Meal.logged_at >= start, Meal.logged_at < end)
        .order_by(Meal.logged_at)
        .all()
    )


@router.get("/meals/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return owned_meal(db, meal_id, current_user.id)


@router.put("/meals/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: int,
    request: MealUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """
    Coalescing update. When `items` is sent the item list is replaced and the
    totals recomputed, all in one transaction.
    """
    validate_meal_type(request.meal_type)
    meal = owned_meal(db, meal_id, current_user.id)

    with transaction(db):
        if request.meal_type is not None:
            meal.meal_type = request.meal_type
        if request.notes is not None:
            meal.notes = request.notes
        if request.items is not None:
            apply_items(meal, request.items)

    db.refresh(meal)
    return meal


@router.delete("/meals/{meal_id}", response_model=MessageResponse)
def delete_meal(
    meal_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    meal = owned_meal(db, meal_id, current_user.id)
    db.delete(meal)
    db.commit()
    return {"message": "Meal deleted"}


# --- Summaries ---

@router.get("/summary/daily")
def daily_summary(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """Consumed vs target for one day. `remaining` goes negative once a target is exceeded."""
    target_day = day or local_today(settings.timezone)
    start, end = day_bounds(target_day, settings.timezone)
    meals = (
        db.query(Meal)
        .filter(Meal.user_id == current_user.id, Meal.logged_at >= start, Meal.logged_at < end)
        .all()
    )

    consumed = {
        "calories": sum(m.total_calories or 0 for m in meals),
        "protein": sum(m.protein_g or 0 for m in meals),
        "carbs": sum(m.carbs_g or 0 for m in meals),
        "fat": sum(m.fat_g or 0 for m in meals),
    }

    source = active_targets(db, current_user.id)
    targets = {
        "calories": source.daily_calories if source else DEFAULT_TARGETS["daily_calories"],
        "protein": source.protein_g if source else DEFAULT_TARGETS["protein_g"],
        "carbs": source.carbs_g if source else DEFAULT_TARGETS["carbs_g"],
        "fat": source.fat_g if source else DEFAULT_TARGETS["fat_g"],
    }

    return {
        "date": target_day.isoformat(),
        "consumed": {**consumed, "meal_count": len(meals)},
        "targets": targets,
        "remaining": nutrition_remaining(targets, consumed),
    }


@router.get("/summary/weekly")
def weekly_summary(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    today = local_today(settings.timezone)
    start, _ = day_bounds(today - timedelta(days=7), settings.timezone)
    meals = (
        db.query(Meal)
        .filter(Meal.user_id == current_user.id, Meal.logged_at >= start)
        .order_by(Meal.logged_at)
        .all()
    )

    days: "OrderedDict[date, Dict[str, float]]" = OrderedDict()
    for meal in meals:
        totals = days.setdefault(
            local_date(meal.logged_at, settings.timezone),
            {"total_calories": 0, "total_protein": 0, "total_carbs": 0, "total_fat": 0, "meal_count": 0},
        )
        totals["total_calories"] += meal.total_calories or 0
        totals["total_protein"] += meal.protein_g or 0
        totals["total_carbs"] += meal.carbs_g or 0
        totals["total_fat"] += meal.fat_g or 0
        totals["meal_count"] += 1

    return [{"date": day.isoformat(), **totals} for day, totals in days.items()]


# --- Pre-built nutrition plans ---

def plan_detail(plan: NutritionPlan) -> dict:
    """Plan columns plus its meal templates grouped by meal type."""
    meals: "OrderedDict[str, List[MealTemplate]]" = OrderedDict()
    for template in plan.templates:
        meals.setdefault(template.meal_type, []).append(template)
    data = NutritionPlanResponse.model_validate(plan).model_dump()
    data["meals"] = meals
    return data


@router.get("/plans", response_model=List[NutritionPlanResponse])
def list_plans(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    day_order = case({day_type: index for index, day_type in enumerate(DAY_TYPES)}, value=NutritionPlan.day_type)
    return (
        db.query(NutritionPlan)
        .filter(NutritionPlan.is_active.is_(True))
        .order_by(day_order, NutritionPlan.id)
        .all()
    )


@router.get("/plans/day-type/{day_type}", response_model=NutritionPlanDetail)
def plan_for_day_type(
    day_type: str,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    if day_type not in DAY_TYPES:
        raise BadRequestError(f"Invalid day type. Must be one of: {', '.join(DAY_TYPES)}")

    plan = (
        db.query(NutritionPlan)
        .filter(NutritionPlan.day_type == day_type, NutritionPlan.is_active.is_(True))
        .order_by(NutritionPlan.id)
        .first()
    )
    if plan is None:
        raise NotFoundError("No plan found for this day type")
    return plan_detail(plan)


@router.get("/plans/{plan_id}", response_model=NutritionPlanDetail)
def get_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    plan = db.query(NutritionPlan).filter(NutritionPlan.id == plan_id).first()
    if plan is None:
        raise NotFoundError("Nutrition plan not found")
    return plan_detail(plan)
