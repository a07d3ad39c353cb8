from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from grindlog.database import Base
from grindlog.utils.time import utcnow


class BodyMeasurement(Base):
    __tablename__ = "body_measurements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    weight = Column(Float)  # kg
    body_fat_percentage = Column(Float)
    muscle_mass = Column(Float)
    chest = Column(Float)
    waist = Column(Float)
    hips = Column(Float)
    biceps = Column(Float)
    thighs = Column(Float)
    notes = Column(Text)
    measured_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="measurements")


class UserGoal(Base):
    __tablename__ = "user_goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    goal_type = Column(String(50), nullable=False)
    target_value = Column(Float)
    current_value = Column(Float)
    unit = Column(String(20))
    deadline = Column(Date)
    achieved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="goals")


class ExerciseProgress(Base):
    """Standalone progress entry, logged outside of a workout session."""

    __tablename__ = "exercise_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True)
    weight = Column(Float)
    sets = Column(Integer)
    reps = Column(Integer)
    duration_seconds = Column(Integer)
    distance_meters = Column(Float)
    intervals = Column(Integer)
    notes = Column(Text)
    logged_at = Column(DateTime, default=utcnow, nullable=False, index=True)
