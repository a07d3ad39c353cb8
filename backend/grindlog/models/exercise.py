from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from grindlog.database import Base
from grindlog.utils.time import utcnow


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), index=True, nullable=False)
    category = Column(String(50))        # e.g., Strength, Cardio
    muscle_group = Column(String(50))    # e.g., Back, Chest
    description = Column(Text)
    is_cardio = Column(Boolean, nullable=False, default=False)
    is_public = Column(Boolean, nullable=False, default=False)
    typical_section = Column(String(50), default="exercise")  # warmup / exercise / cooldown
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
