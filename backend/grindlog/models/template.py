from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from grindlog.database import Base
from grindlog.utils.time import utcnow


class WorkoutTemplate(Base):
    """One line of the shared weekly training program."""

    __tablename__ = "workout_templates"

    id = Column(Integer, primary_key=True, index=True)
    day_of_week = Column(Integer, nullable=False, index=True)  # 0=Sunday .. 6=Saturday
    day_name = Column(String(50))
    section = Column(String(50))  # warmup / main / finisher
    exercise = Column(String(100), nullable=False)
    sets_reps = Column(String(50))  # e.g. "4x8"
    intensity = Column(String(50))
    rest_seconds = Column(Integer)
    notes = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
