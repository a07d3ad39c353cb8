from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from grindlog.database import Base
from grindlog.utils.time import utcnow


class WeeklySchedule(Base):
    """A user's plan for one weekday."""

    __tablename__ = "weekly_schedule"
    __table_args__ = (UniqueConstraint("user_id", "day_of_week", name="uq_weekly_schedule_user_day"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    name = Column(String(100))
    plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True)
    is_rest_day = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    exercises = relationship(
        "ScheduleDayExercise",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleDayExercise.order_index",
    )


class ScheduleDayExercise(Base):
    __tablename__ = "schedule_day_exercises"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, ForeignKey("weekly_schedule.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    sets = Column(Integer)
    reps = Column(Integer)
    weight = Column(Float)
    duration_seconds = Column(Integer)
    intervals = Column(Integer)
    rest_seconds = Column(Integer)
    notes = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    schedule = relationship("WeeklySchedule", back_populates="exercises")


class AiRecommendation(Base):
    """A queued recommendation request; status stays "pending" until a generator picks it up."""

    __tablename__ = "ai_recommendations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50))
    status = Column(String(20), nullable=False, default="pending")
    request_data = Column(JSON)
    created_at = Column(DateTime, default=utcnow, nullable=False)
