from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from grindlog.database import Base
from grindlog.utils.time import utcnow


class Supplement(Base):
    """A supplement definition, either global or owned by one user."""

    __tablename__ = "supplements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    dosage = Column(String(50))
    frequency = Column(String(100))  # free text, e.g. "2x daily"
    timing_notes = Column(Text)
    description = Column(Text)
    is_global = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class SupplementLog(Base):
    """One dose taken."""

    __tablename__ = "supplement_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    supplement_id = Column(Integer, ForeignKey("supplements.id", ondelete="CASCADE"), nullable=False, index=True)
    dosage = Column(String(50))
    notes = Column(Text)
    taken_at = Column(DateTime, default=utcnow, nullable=False, index=True)
