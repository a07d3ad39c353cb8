"""initial schema

Revision ID: 3f1c2a9b7e40
Revises: 
Create Date: 2026-10-18 09:12:44.118205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk(nullable=False, ondelete="CASCADE", index=True):
    return sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete=ondelete), nullable=nullable, index=index)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(100)),
        sa.Column("avatar_url", sa.String(500)),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("height_cm", sa.Float()),
        sa.Column("fitness_goal", sa.String(50)),
        sa.Column("experience_level", sa.String(50)),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("workouts_setup", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("menu_setup", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("category", sa.String(50)),
        sa.Column("muscle_group", sa.String(50)),
        sa.Column("description", sa.Text()),
        sa.Column("is_cardio", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("typical_section", sa.String(50)),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    # --- Workouts ---
    op.create_table(
        "workout_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "workout_plan_exercises",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id"), nullable=False),
        sa.Column("sets", sa.Integer()),
        sa.Column("reps", sa.Integer()),
        sa.Column("duration_minutes", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("workout_plans.id", ondelete="SET NULL")),
        sa.Column("name", sa.String(100)),
        sa.Column("notes", sa.Text()),
        sa.Column("started_at", sa.DateTime(), nullable=False, index=True),
        sa.Column("ended_at", sa.DateTime()),
    )
    op.create_table(
        "exercise_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id"), nullable=False, index=True),
        sa.Column("set_number", sa.Integer()),
        sa.Column("reps", sa.Integer()),
        sa.Column("weight", sa.Float()),
        sa.Column("duration_seconds", sa.Integer()),
        sa.Column("distance_meters", sa.Float()),
        sa.Column("notes", sa.Text()),
        sa.Column("logged_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "cardio_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id")),
        sa.Column("duration_minutes", sa.Integer()),
        sa.Column("distance_km", sa.Float()),
        sa.Column("calories_burned", sa.Float()),
        sa.Column("avg_heart_rate", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("session_date", sa.DateTime(), nullable=False, index=True),
    )

    # --- Progress ---
    op.create_table(
        "body_measurements",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("weight", sa.Float()),
        sa.Column("body_fat_percentage", sa.Float()),
        sa.Column("muscle_mass", sa.Float()),
        sa.Column("chest", sa.Float()),
        sa.Column("waist", sa.Float()),
        sa.Column("hips", sa.Float()),
        sa.Column("biceps", sa.Float()),
        sa.Column("thighs", sa.Float()),
        sa.Column("notes", sa.Text()),
        sa.Column("measured_at", sa.DateTime(), nullable=False, index=True),
    )
    op.create_table(
        "user_goals",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("goal_type", sa.String(50), nullable=False),
        sa.Column("target_value", sa.Float()),
        sa.Column("current_value", sa.Float()),
        sa.Column("unit", sa.String(20)),
        sa.Column("deadline", sa.Date()),
        sa.Column("achieved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_table(
        "exercise_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("weight", sa.Float()),
        sa.Column("sets", sa.Integer()),
        sa.Column("reps", sa.Integer()),
        sa.Column("duration_seconds", sa.Integer()),
        sa.Column("distance_meters", sa.Float()),
        sa.Column("intervals", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("logged_at", sa.DateTime(), nullable=False, index=True),
    )

    # --- Diet ---
    op.create_table(
        "food_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("brand", sa.String(100)),
        sa.Column("serving_size", sa.String(50)),
        sa.Column("calories", sa.Float()),
        sa.Column("protein", sa.Float()),
        sa.Column("carbs", sa.Float()),
        sa.Column("fat", sa.Float()),
        sa.Column("fiber", sa.Float()),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "diet_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("food_item_id", sa.Integer(), sa.ForeignKey("food_items.id", ondelete="SET NULL")),
        sa.Column("custom_name", sa.String(100)),
        sa.Column("servings", sa.Float()),
        sa.Column("meal_type", sa.String(50)),
        sa.Column("calories", sa.Float()),
        sa.Column("protein", sa.Float()),
        sa.Column("carbs", sa.Float()),
        sa.Column("fat", sa.Float()),
        sa.Column("logged_at", sa.DateTime(), nullable=False, index=True),
    )

    # --- Nutrition ---
    op.create_table(
        "nutrition_targets",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(index=False),
        sa.Column("daily_calories", sa.Float()),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("user_id"),
    )
    op.create_table(
        "meals",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("meal_type", sa.String(50), nullable=False),
        sa.Column("logged_at", sa.DateTime(), nullable=False, index=True),
        sa.Column("total_calories", sa.Float()),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("notes", sa.Text()),
    )
    op.create_table(
        "meal_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("meal_id", sa.Integer(), sa.ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("ingredient", sa.String(100)),
        sa.Column("amount", sa.String(50)),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("calories", sa.Float()),
        sa.Column("notes", sa.Text()),
    )
    op.create_table(
        "nutrition_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("day_type", sa.String(50), nullable=False, index=True),
        sa.Column("description", sa.Text()),
        sa.Column("daily_calories", sa.Float()),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("meals_count", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "meal_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("nutrition_plans.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("meal_type", sa.String(50), nullable=False),
        sa.Column("option_name", sa.String(100)),
        sa.Column("total_calories", sa.Float()),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("timing_notes", sa.Text()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "meal_template_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("template_id", sa.Integer(), sa.ForeignKey("meal_templates.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("ingredient", sa.String(100)),
        sa.Column("amount", sa.String(50)),
        sa.Column("protein_g", sa.Float()),
        sa.Column("carbs_g", sa.Float()),
        sa.Column("fat_g", sa.Float()),
        sa.Column("calories", sa.Float()),
        sa.Column("notes", sa.Text()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
    )

    # --- Supplements and routines ---
    op.create_table(
        "supplements",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("dosage", sa.String(50)),
        sa.Column("frequency", sa.String(100)),
        sa.Column("timing_notes", sa.Text()),
        sa.Column("description", sa.Text()),
        sa.Column("is_global", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "supplement_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("supplement_id", sa.Integer(), sa.ForeignKey("supplements.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("dosage", sa.String(50)),
        sa.Column("notes", sa.Text()),
        sa.Column("taken_at", sa.DateTime(), nullable=False, index=True),
    )
    op.create_table(
        "routines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("total_duration_minutes", sa.Integer()),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "routine_completions",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("routine_id", sa.Integer(), sa.ForeignKey("routines.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("items_completed", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("completed_at", sa.DateTime(), nullable=False, index=True),
    )

    # --- Cardio protocols and weekly templates ---
    op.create_table(
        "cardio_protocols",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("modality", sa.String(50)),
        sa.Column("description", sa.Text()),
        sa.Column("total_minutes", sa.Integer()),
        sa.Column("frequency", sa.String(100)),
        sa.Column("hr_zone_target", sa.String(50)),
        sa.Column("instructions", sa.Text()),
        sa.Column("science_notes", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "cardio_protocol_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("protocol_id", sa.Integer(), sa.ForeignKey("cardio_protocols.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("duration_minutes", sa.Integer()),
        sa.Column("avg_heart_rate", sa.Integer()),
        sa.Column("max_heart_rate", sa.Integer()),
        sa.Column("calories_burned", sa.Float()),
        sa.Column("notes", sa.Text()),
        sa.Column("completed_at", sa.DateTime(), nullable=False, index=True),
    )
    op.create_table(
        "workout_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False, index=True),
        sa.Column("day_name", sa.String(50)),
        sa.Column("section", sa.String(50)),
        sa.Column("exercise", sa.String(100), nullable=False),
        sa.Column("sets_reps", sa.String(50)),
        sa.Column("intensity", sa.String(50)),
        sa.Column("rest_seconds", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # --- Groups ---
    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("description", sa.Text()),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "group_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True),
        _user_fk(),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("joined_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
    )
    op.create_table(
        "sharing_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("share_workouts", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("share_diet", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("share_progress", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("share_plans", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("user_id", "group_id", name="uq_sharing_settings_user_group"),
    )

    # --- Onboarding schedule ---
    op.create_table(
        "weekly_schedule",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100)),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("workout_plans.id", ondelete="SET NULL")),
        sa.Column("is_rest_day", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "day_of_week", name="uq_weekly_schedule_user_day"),
    )
    op.create_table(
        "schedule_day_exercises",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("schedule_id", sa.Integer(), sa.ForeignKey("weekly_schedule.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sets", sa.Integer()),
        sa.Column("reps", sa.Integer()),
        sa.Column("weight", sa.Float()),
        sa.Column("duration_seconds", sa.Integer()),
        sa.Column("intervals", sa.Integer()),
        sa.Column("rest_seconds", sa.Integer()),
        sa.Column("notes", sa.Text()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "ai_recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("type", sa.String(50)),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("request_data", sa.JSON()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    for table in (
        "ai_recommendations",
        "schedule_day_exercises",
        "weekly_schedule",
        "sharing_settings",
        "group_members",
        "groups",
        "workout_templates",
        "cardio_protocol_logs",
        "cardio_protocols",
        "routine_completions",
        "routines",
        "supplement_logs",
        "supplements",
        "meal_template_items",
        "meal_templates",
        "nutrition_plans",
        "meal_items",
        "meals",
        "nutrition_targets",
        "diet_logs",
        "food_items",
        "exercise_progress",
        "user_goals",
        "body_measurements",
        "cardio_sessions",
        "exercise_logs",
        "workout_sessions",
        "workout_plan_exercises",
        "workout_plans",
        "exercises",
        "users",
    ):
        op.drop_table(table)
