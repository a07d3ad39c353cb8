from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import relationship

from grindlog.database import Base
from grindlog.utils.time import utcnow

USER_ROLES = ("user", "admin")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(100))
    avatar_url = Column(String(500))
    role = Column(String(20), nullable=False, default="user")  # "user" or "admin"

    # Onboarding profile
    height_cm = Column(Float)
    fitness_goal = Column(String(50))
    experience_level = Column(String(50))
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    workouts_setup = Column(Boolean, nullable=False, default=False)
    menu_setup = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    measurements = relationship("BodyMeasurement", back_populates="user", cascade="all, delete-orphan")
    goals = relationship("UserGoal", back_populates="user", cascade="all, delete-orphan")
