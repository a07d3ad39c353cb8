from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text

from grindlog.database import Base
from grindlog.utils.time import utcnow


class CardioProtocol(Base):
    __tablename__ = "cardio_protocols"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    modality = Column(String(50))  # bike, rower, run...
    description = Column(Text)
    total_minutes = Column(Integer)
    frequency = Column(String(100))
    hr_zone_target = Column(String(50))
    instructions = Column(Text)
    science_notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class CardioProtocolLog(Base):
    __tablename__ = "cardio_protocol_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    protocol_id = Column(Integer, ForeignKey("cardio_protocols.id", ondelete="CASCADE"), nullable=False, index=True)
    duration_minutes = Column(Integer)
    avg_heart_rate = Column(Integer)
    max_heart_rate = Column(Integer)
    calories_burned = Column(Float)
    notes = Column(Text)
    completed_at = Column(DateTime, default=utcnow, nullable=False, index=True)
