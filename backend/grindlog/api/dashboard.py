from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user, get_settings
from grindlog.config import Settings
from grindlog.database import get_db
from grindlog.services.stats_service import StatsService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/compliance")
def compliance(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """Today's compliance score with the inputs behind it and the current streaks."""
    return StatsService(db, settings.timezone).compliance(current_user.id)
