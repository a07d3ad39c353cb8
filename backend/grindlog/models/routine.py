from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from grindlog.database import Base
from grindlog.utils.time import utcnow

ROUTINE_TYPES = ("morning", "evening")


class Routine(Base):
    __tablename__ = "routines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)  # "morning" or "evening"
    description = Column(Text)
    total_duration_minutes = Column(Integer)
    items = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class RoutineCompletion(Base):
    __tablename__ = "routine_completions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id", ondelete="CASCADE"), nullable=False, index=True)
    items_completed = Column(JSON, nullable=False, default=list)  # names of completed items
    notes = Column(Text)
    completed_at = Column(DateTime, default=utcnow, nullable=False, index=True)
