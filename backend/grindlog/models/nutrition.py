from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from grindlog.database import Base
from grindlog.utils.time import utcnow

MEAL_TYPES = ("breakfast", "pre_workout", "lunch", "post_workout", "snack", "dinner")
DAY_TYPES = ("high_intensity", "moderate", "recovery")


class NutritionTarget(Base):
    __tablename__ = "nutrition_targets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    daily_calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_type = Column(String(50), nullable=False)
    logged_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    total_calories = Column(Float, default=0.0)
    protein_g = Column(Float, default=0.0)
    carbs_g = Column(Float, default=0.0)
    fat_g = Column(Float, default=0.0)
    notes = Column(Text)

    items = relationship("MealItem", back_populates="meal", cascade="all, delete-orphan", order_by="MealItem.id")


class MealItem(Base):
    __tablename__ = "meal_items"

    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient = Column(String(100))
    amount = Column(String(50))
    protein_g = Column(Float, default=0.0)
    carbs_g = Column(Float, default=0.0)
    fat_g = Column(Float, default=0.0)
    calories = Column(Float, default=0.0)
    notes = Column(Text)

    meal = relationship("Meal", back_populates="items")


class NutritionPlan(Base):
    """Pre-built day plan (high intensity / moderate / recovery)."""

    __tablename__ = "nutrition_plans"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    day_type = Column(String(50), nullable=False, index=True)
    description = Column(Text)
    daily_calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    meals_count = Column(Integer)
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    templates = relationship(
        "MealTemplate", back_populates="plan", cascade="all, delete-orphan", order_by="MealTemplate.order_index"
    )


class MealTemplate(Base):
    __tablename__ = "meal_templates"

    id = Column(Integer, primary_key=True, index=True)
    plan_id = Column(Integer, ForeignKey("nutrition_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_type = Column(String(50), nullable=False)
    option_name = Column(String(100))
    total_calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    timing_notes = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)

    plan = relationship("NutritionPlan", back_populates="templates")
    items = relationship(
        "MealTemplateItem",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="MealTemplateItem.order_index",
    )


class MealTemplateItem(Base):
    __tablename__ = "meal_template_items"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("meal_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient = Column(String(100))
    amount = Column(String(50))
    protein_g = Column(Float, default=0.0)
    carbs_g = Column(Float, default=0.0)
    fat_g = Column(Float, default=0.0)
    calories = Column(Float, default=0.0)
    notes = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)

    template = relationship("MealTemplate", back_populates="items")
