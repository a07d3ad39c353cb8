from datetime import datetime, timedelta
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import QUERY_DEFAULTS, Settings
from grindlog.database import get_db, to_dict
from grindlog.errors import NotFoundError
from grindlog.models.cardio import CardioProtocol, CardioProtocolLog
from grindlog.schemas.cardio import (
    DayProtocol,
    ProtocolCreate,
    ProtocolLogCreate,
    ProtocolLogResponse,
    ProtocolResponse,
    ProtocolUpdate,
    WeeklyCardioSummary,
)
from grindlog.utils.time import day_bounds, local_today, to_utc_naive

router = APIRouter(prefix="/api/cardio", tags=["cardio"])

# Weekday (0=Sunday) -> protocol of the training program
PROGRAM_BY_DAY = {
    1: ("4x4 Protocol", "4 rounds of 4 min max effort + 4 min recovery"),
    2: ("Zone 2 Aerobic Base", "Zone 2 cardio after pull workout"),
    4: ("3 Min Hard Intervals", "5 rounds of 3 min hard + 2 min easy"),
    5: ("Tabata", "8 rounds of 20 sec max + 10 sec rest (optional)"),
}


def match_protocol(program_name: str, protocols: List[CardioProtocol]) -> Optional[CardioProtocol]:
    """First protocol whose name shares a leading word with `program_name`."""
    wanted = program_name.lower()
    for protocol in protocols:
        name = protocol.name.lower()
        if wanted.split(" ")[0] in name or name.split(" ")[0] in wanted:
            return protocol
    return None


# --- Protocols ---

@router.get("/protocols", response_model=List[ProtocolResponse])
def list_protocols(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return db.query(CardioProtocol).filter(CardioProtocol.is_active.is_(True)).order_by(CardioProtocol.name).all()


@router.get("/protocols/{protocol_id}", response_model=ProtocolResponse)
def get_protocol(
    protocol_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    protocol = (
        db.query(CardioProtocol)
        .filter(CardioProtocol.id == protocol_id, CardioProtocol.is_active.is_(True))
        .first()
    )
    if protocol is None:
        raise NotFoundError("Protocol not found")
    return protocol


@router.post("/protocols", response_model=ProtocolResponse, status_code=status.HTTP_201_CREATED)
def create_protocol(
    request: ProtocolCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    protocol = CardioProtocol(**request.model_dump())
    db.add(protocol)
    db.commit()
    db.refresh(protocol)
    return protocol


@router.put("/protocols/{protocol_id}", response_model=ProtocolResponse)
def update_protocol(
    protocol_id: int,
    request: ProtocolUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    protocol = db.query(CardioProtocol).filter(CardioProtocol.id == protocol_id).first()
    if protocol is None:
        raise NotFoundError("Protocol not found")

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(protocol, field, value)
    db.commit()
    db.refresh(protocol)
    return protocol


# --- Logs ---

@router.post("/log", response_model=ProtocolLogResponse, status_code=status.HTTP_201_CREATED)
def log_protocol(
    request: ProtocolLogCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    protocol = db.query(CardioProtocol).filter(CardioProtocol.id == request.protocol_id).first()
    if protocol is None:
        raise NotFoundError("Protocol not found")

    log = CardioProtocolLog(user_id=current_user.id, **request.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return to_dict(log, protocol_name=protocol.name, modality=protocol.modality, hr_zone_target=protocol.hr_zone_target)


@router.get("/logs", response_model=List[ProtocolLogResponse])
def list_logs(
    limit: int = Query(QUERY_DEFAULTS.cardio_log_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    offset: int = Query(0, ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    protocol_id: Optional[int] = Query(None, alias="protocolId"),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    query = (
        db.query(CardioProtocolLog, CardioProtocol.name, CardioProtocol.modality, CardioProtocol.hr_zone_target)
        .join(CardioProtocol, CardioProtocolLog.protocol_id == CardioProtocol.id)
        .filter(CardioProtocolLog.user_id == current_user.id)
    )
    if start_date:
        query = query.filter(CardioProtocolLog.completed_at >= to_utc_naive(start_date))
    if end_date:
        query = query.filter(CardioProtocolLog.completed_at <= to_utc_naive(end_date))
    if protocol_id:
        query = query.filter(CardioProtocolLog.protocol_id == protocol_id)

    rows = (
        query.order_by(CardioProtocolLog.completed_at.desc(), CardioProtocolLog.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [
        to_dict(log, protocol_name=name, modality=modality, hr_zone_target=zone)
        for log, name, modality, zone in rows
    ]


@router.get("/summary/weekly", response_model=WeeklyCardioSummary)
def weekly_summary(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    start, _ = day_bounds(local_today(settings.timezone) - timedelta(days=7), settings.timezone)
    sessions, minutes, heart_rate, calories = (
        db.query(
            func.count(CardioProtocolLog.id),
            func.coalesce(func.sum(CardioProtocolLog.duration_minutes), 0),
            func.avg(CardioProtocolLog.avg_heart_rate),
            func.coalesce(func.sum(CardioProtocolLog.calories_burned), 0),
        )
        .filter(CardioProtocolLog.user_id == current_user.id, CardioProtocolLog.completed_at >= start)
        .one()
    )
    return {
        "total_sessions": sessions,
        "total_minutes": minutes,
        "avg_heart_rate": float(heart_rate) if heart_rate is not None else None,
        "total_calories": calories,
    }


@router.get("/by-day", response_model=Dict[int, DayProtocol])
def protocols_by_day(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    protocols = db.query(CardioProtocol).filter(CardioProtocol.is_active.is_(True)).order_by(CardioProtocol.name).all()
    return {
        day: {
            "day": day,
            "protocol_name": name,
            "description": description,
            "protocol": match_protocol(name, protocols),
        }
        for day, (name, description) in PROGRAM_BY_DAY.items()
    }
