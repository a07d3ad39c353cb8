from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.database import get_db, to_dict
from grindlog.errors import NotFoundError
from grindlog.models.diet import DietLog, FoodItem
from grindlog.models.supplement import Supplement, SupplementLog
from grindlog.schemas.diet import (
    DietLogCreate,
    DietLogResponse,
    DietSummary,
    FoodItemCreate,
    FoodItemResponse,
    QuickSupplementLog,
)
from grindlog.schemas.supplement import SupplementLogResponse, SupplementResponse
from grindlog.utils.time import day_bounds, local_today, to_utc_naive

router = APIRouter(prefix="/api/diet", tags=["diet"])


# GET - Food catalog (public + own), optional name search
@router.get("/foods", response_model=List[FoodItemResponse])
def list_foods(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = db.query(FoodItem).filter(or_(FoodItem.is_public.is_(True), FoodItem.created_by == current_user.id))
    if search:
        query = query.filter(FoodItem.name.ilike(f"%{search}%"))
    return query.order_by(FoodItem.name).limit(QUERY_DEFAULTS.food_search_limit).all()


@router.post("/foods", response_model=FoodItemResponse, status_code=status.HTTP_201_CREATED)
def create_food(
    request: FoodItemCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    food = FoodItem(**request.model_dump(), created_by=current_user.id)
    db.add(food)
    db.commit()
    db.refresh(food)
    return food


@router.post("/log", response_model=DietLogResponse, status_code=status.HTTP_201_CREATED)
def log_food(
    request: DietLogCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    log = DietLog(user_id=current_user.id, **request.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


@router.get("/log", response_model=List[DietLogResponse])
def list_food_logs(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = (
        db.query(DietLog, FoodItem.name, FoodItem.brand)
        .outerjoin(FoodItem, DietLog.food_item_id == FoodItem.id)
        .filter(DietLog.user_id == current_user.id)
    )
    if start_date:
        query = query.filter(DietLog.logged_at >= to_utc_naive(start_date))
    if end_date:
        query = query.filter(DietLog.logged_at <= to_utc_naive(end_date))

    rows = query.order_by(DietLog.logged_at.desc()).limit(QUERY_DEFAULTS.diet_log_limit).all()
    return [to_dict(log, food_name=name, brand=brand) for log, name, brand in rows]


@router.get("/summary", response_model=DietSummary)
def daily_summary(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    target = day or local_today(settings.timezone)
    start, end = day_bounds(target, settings.timezone)

    count, calories, protein, carbs, fat = (
        db.query(
            func.count(DietLog.id),
            func.coalesce(func.sum(DietLog.calories), 0),
            func.coalesce(func.sum(DietLog.protein), 0),
            func.coalesce(func.sum(DietLog.carbs), 0),
            func.coalesce(func.sum(DietLog.fat), 0),
        )
        .filter(DietLog.user_id == current_user.id, DietLog.logged_at >= start, DietLog.logged_at < end)
        .one()
    )
    return DietSummary(
        date=target.isoformat(),
        meals_logged=count,
        total_calories=calories,
        total_protein=protein,
        total_carbs=carbs,
        total_fat=fat,
    )


# --- Quick supplement logging from the diet screen ---

@router.get("/supplements", response_model=List[SupplementResponse])
def list_supplements(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return (
        db.query(Supplement)
        .filter(
            or_(Supplement.user_id == current_user.id, Supplement.is_global.is_(True)),
            Supplement.is_active.is_(True),
        )
        .order_by(Supplement.name)
        .all()
    )


@router.post("/supplements/log", response_model=SupplementLogResponse, status_code=status.HTTP_201_CREATED)
def quick_log_supplement(
    request: QuickSupplementLog,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    supplement = (
        db.query(Supplement)
        .filter(
            Supplement.id == request.supplement_id,
            or_(Supplement.user_id == current_user.id, Supplement.is_global.is_(True)),
        )
        .first()
    )
    if supplement is None:
        raise NotFoundError("Supplement not found")

    log = SupplementLog(user_id=current_user.id, supplement_id=supplement.id, dosage=request.dosage)
    db.add(log)
    db.commit()
    db.refresh(log)
    return to_dict(log, supplement_name=supplement.name)


@router.get("/supplements/log", response_model=List[SupplementLogResponse])
def supplement_logs_for_day(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    start, end = day_bounds(day or local_today(settings.timezone), settings.timezone)
    rows = (
        db.query(SupplementLog, Supplement.name)
        .join(Supplement, SupplementLog.supplement_id == Supplement.id)
        .filter(
            SupplementLog.user_id == current_user.id,
            SupplementLog.taken_at >= start,
            SupplementLog.taken_at < end,
        )
        .order_by(SupplementLog.taken_at)
        .all()
    )
    return [to_dict(log, supplement_name=name) for log, name in rows]
