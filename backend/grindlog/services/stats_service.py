import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Any, Dict, List

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from grindlog.database import to_dict
from grindlog.models.cardio import CardioProtocolLog
from grindlog.models.diet import DietLog
from grindlog.models.exercise import Exercise
from grindlog.models.group import Group
from grindlog.models.nutrition import Meal
from grindlog.models.progress import BodyMeasurement, ExerciseProgress
from grindlog.models.routine import RoutineCompletion
from grindlog.models.supplement import Supplement, SupplementLog
from grindlog.models.user import User
from grindlog.models.workout import CardioSession, ExerciseLog, WorkoutSession
from grindlog.services.compliance import (
    STREAK_WINDOW_DAYS,
    calculate_streak,
    compliance_score,
    expected_doses,
    weekly_supplement_series,
)
from grindlog.utils.time import day_bounds, days_ago, local_date, local_today

logger = logging.getLogger(__name__)


class StatsService:
    """
    Fetches the rows behind dashboards and statistics and hands them to the
    formulas in `grindlog.services.compliance`.

    Calendar days are resolved in `tz_name`; the database only ever sees
    naive-UTC ranges.
    """

    def __init__(self, db: Session, tz_name: str = "UTC"):
        self.db = db
        self.tz_name = tz_name

    @property
    def today(self) -> date:
        return local_today(self.tz_name)

    def _window_start(self, days: int):
        # Start of the oldest local day in the window
        start, _ = day_bounds(self.today - timedelta(days=days - 1), self.tz_name)
        return start

    def _to_days(self, timestamps) -> List[date]:
        return [local_date(ts, self.tz_name) for ts in timestamps]

    # --- Supplements ---

    def active_supplements(self, user_id: int) -> List[Supplement]:
        stmt = (
            select(Supplement)
            .where(
                or_(Supplement.user_id == user_id, Supplement.is_global.is_(True)),
                Supplement.is_active.is_(True),
            )
            .order_by(Supplement.name)
        )
        return list(self.db.execute(stmt).scalars().all())

    def supplement_status_today(self, user_id: int) -> List[Dict[str, Any]]:
        """Doses logged today against doses expected, per active supplement."""
        supplements = self.active_supplements(user_id)
        start, end = day_bounds(self.today, self.tz_name)
        stmt = (
            select(SupplementLog, Supplement.name)
            .join(Supplement, SupplementLog.supplement_id == Supplement.id)
            .where(SupplementLog.user_id == user_id, SupplementLog.taken_at >= start, SupplementLog.taken_at < end)
            .order_by(SupplementLog.taken_at)
        )
        logs = self.db.execute(stmt).all()

        status = []
        for supplement in supplements:
            today_logs = [
                to_dict(log, supplement_name=name) for log, name in logs if log.supplement_id == supplement.id
            ]
            expected = expected_doses(supplement.frequency)
            status.append(
                {
                    "supplement": supplement,
                    "today_logs": today_logs,
                    "doses_logged": len(today_logs),
                    "expected_doses": expected,
                    "complete": len(today_logs) >= expected,
                }
            )
        return status

    def supplement_days(self, user_id: int, days: int = STREAK_WINDOW_DAYS) -> List[date]:
        stmt = select(SupplementLog.taken_at).where(
            SupplementLog.user_id == user_id, SupplementLog.taken_at >= self._window_start(days)
        )
        return self._to_days(self.db.execute(stmt).scalars().all())

    def weekly_supplements(self, user_id: int) -> List[Dict[str, Any]]:
        tracked = len(self.active_supplements(user_id))
        return weekly_supplement_series(self.supplement_days(user_id, days=7), self.today, tracked)

    # --- Workouts and routines ---

    def workout_days(self, user_id: int, days: int = STREAK_WINDOW_DAYS) -> List[date]:
        """Days with a started session or a standalone progress entry."""
        since = self._window_start(days)
        sessions = self.db.execute(
            select(WorkoutSession.started_at).where(WorkoutSession.user_id == user_id, WorkoutSession.started_at >= since)
        ).scalars().all()
        progress = self.db.execute(
            select(ExerciseProgress.logged_at).where(
                ExerciseProgress.user_id == user_id, ExerciseProgress.logged_at >= since
            )
        ).scalars().all()
        return self._to_days(list(sessions) + list(progress))

    def routine_days(self, user_id: int, days: int = STREAK_WINDOW_DAYS) -> List[date]:
        stmt = select(RoutineCompletion.completed_at).where(
            RoutineCompletion.user_id == user_id, RoutineCompletion.completed_at >= self._window_start(days)
        )
        return self._to_days(self.db.execute(stmt).scalars().all())

    def workout_count(self, user_id: int, days: int = STREAK_WINDOW_DAYS) -> int:
        stmt = select(func.count(WorkoutSession.id)).where(
            WorkoutSession.user_id == user_id, WorkoutSession.started_at >= self._window_start(days)
        )
        return self.db.execute(stmt).scalar() or 0

    def routines_completed_today(self, user_id: int) -> int:
        start, end = day_bounds(self.today, self.tz_name)
        stmt = select(func.count(RoutineCompletion.id)).where(
            RoutineCompletion.user_id == user_id,
            RoutineCompletion.completed_at >= start,
            RoutineCompletion.completed_at < end,
        )
        return self.db.execute(stmt).scalar() or 0

    def calories_today(self, user_id: int) -> float:
        start, end = day_bounds(self.today, self.tz_name)
        stmt = select(func.coalesce(func.sum(Meal.total_calories), 0)).where(
            Meal.user_id == user_id, Meal.logged_at >= start, Meal.logged_at < end
        )
        return float(self.db.execute(stmt).scalar() or 0)

    def streak(self, active_days: List[date]) -> int:
        return calculate_streak(active_days, self.today)

    # --- Dashboard ---

    def compliance(self, user_id: int) -> Dict[str, Any]:
        status = self.supplement_status_today(user_id)
        inputs = {
            "workout_count": self.workout_count(user_id),
            "supplements_complete": sum(1 for s in status if s["complete"]),
            "total_supplements": len(status),
            "routines_completed_today": self.routines_completed_today(user_id),
            "calories_logged": self.calories_today(user_id),
        }
        score = compliance_score(**inputs)
        logger.debug("Compliance for user %s: %s", user_id, score)

        return {
            "date": self.today.isoformat(),
            "score": score.to_dict(),
            "inputs": inputs,
            "streaks": {
                "workouts": self.streak(self.workout_days(user_id)),
                "supplements": self.streak(self.supplement_days(user_id)),
                "routines": self.streak(self.routine_days(user_id)),
            },
        }

    # --- Progress ---

    def progress_stats(self, user_id: int, days: int) -> Dict[str, Any]:
        since = days_ago(days)

        workout_count, total_minutes = self._workout_totals(user_id, since)

        cardio_count, cardio_minutes, cardio_km = self.db.execute(
            select(
                func.count(CardioSession.id),
                func.coalesce(func.sum(CardioSession.duration_minutes), 0),
                func.coalesce(func.sum(CardioSession.distance_km), 0),
            ).where(CardioSession.user_id == user_id, CardioSession.session_date >= since)
        ).one()

        weights = self.db.execute(
            select(BodyMeasurement.weight)
            .where(BodyMeasurement.user_id == user_id, BodyMeasurement.weight.isnot(None))
            .order_by(BodyMeasurement.measured_at.desc(), BodyMeasurement.id.desc())
            .limit(2)
        ).scalars().all()
        current = weights[0] if weights else None
        previous = weights[1] if len(weights) > 1 else None

        calories = self.db.execute(
            select(DietLog.logged_at, DietLog.calories).where(DietLog.user_id == user_id, DietLog.logged_at >= since)
        ).all()
        per_day: Dict[date, float] = {}
        for logged_at, kcal in calories:
            day = local_date(logged_at, self.tz_name)
            per_day[day] = per_day.get(day, 0) + (kcal or 0)
        avg_calories = round(sum(per_day.values()) / len(per_day), 1) if per_day else 0

        return {
            "period": f"{days} days",
            "workouts": {"count": workout_count, "total_minutes": round(total_minutes or 0)},
            "cardio": {
                "count": cardio_count,
                "total_minutes": int(cardio_minutes or 0),
                "total_km": float(cardio_km or 0),
            },
            "weight": {
                "current": current,
                "previous": previous,
                "change": round(current - previous, 1) if current is not None and previous is not None else None,
            },
            "nutrition": {"avg_daily_calories": avg_calories},
        }

    def _workout_totals(self, user_id: int, since):
        # Durations summed in Python: date arithmetic differs between SQLite and PostgreSQL
        rows = self.db.execute(
            select(WorkoutSession.started_at, WorkoutSession.ended_at).where(
                WorkoutSession.user_id == user_id, WorkoutSession.started_at >= since
            )
        ).all()
        minutes = sum((ended - started).total_seconds() / 60 for started, ended in rows if ended is not None)
        return len(rows), minutes

    # --- Admin ---

    def overview(self) -> Dict[str, Any]:
        week_ago = days_ago(7)
        month_ago = days_ago(30)

        def count(stmt) -> int:
            return self.db.execute(stmt).scalar() or 0

        return {
            "users": {
                "total": count(select(func.count(User.id))),
                "new_this_week": count(select(func.count(User.id)).where(User.created_at >= week_ago)),
                "new_this_month": count(select(func.count(User.id)).where(User.created_at >= month_ago)),
                "admins": count(select(func.count(User.id)).where(User.role == "admin")),
            },
            "workouts": {
                "total": count(select(func.count(WorkoutSession.id))),
                "this_week": count(select(func.count(WorkoutSession.id)).where(WorkoutSession.started_at >= week_ago)),
                "active_users_this_week": count(
                    select(func.count(func.distinct(WorkoutSession.user_id))).where(
                        WorkoutSession.started_at >= week_ago
                    )
                ),
            },
            "groups": {"total": count(select(func.count(Group.id)))},
            "exercises": {
                "total": count(select(func.count(Exercise.id))),
                "sets_logged": count(select(func.count(ExerciseLog.id))),
            },
            "cardio": {
                "sessions": count(select(func.count(CardioSession.id))),
                "protocol_logs": count(select(func.count(CardioProtocolLog.id))),
            },
        }

    def _daily_counts(self, timestamps) -> List[Dict[str, Any]]:
        counts: "OrderedDict[date, int]" = OrderedDict()
        for day in sorted(self._to_days(timestamps)):
            counts[day] = counts.get(day, 0) + 1
        return [{"date": day.isoformat(), "count": n} for day, n in counts.items()]

    def user_growth(self, days: int) -> List[Dict[str, Any]]:
        since = self._window_start(days)
        rows = self.db.execute(select(User.created_at).where(User.created_at >= since)).scalars().all()
        return self._daily_counts(rows)

    def activity(self, days: int) -> Dict[str, List[Dict[str, Any]]]:
        since = self._window_start(days)
        workouts = self.db.execute(
            select(WorkoutSession.started_at).where(WorkoutSession.started_at >= since)
        ).scalars().all()
        cardio = self.db.execute(
            select(CardioSession.session_date).where(CardioSession.session_date >= since)
        ).scalars().all()
        meals = self.db.execute(select(Meal.logged_at).where(Meal.logged_at >= since)).scalars().all()
        return {
            "workouts": self._daily_counts(workouts),
            "cardio": self._daily_counts(cardio),
            "meals": self._daily_counts(meals),
        }

    def popular_exercises(self, limit: int) -> List[Dict[str, Any]]:
        stmt = (
            select(
                Exercise.id,
                Exercise.name,
                Exercise.category,
                func.count(ExerciseLog.id).label("times_logged"),
                func.count(func.distinct(WorkoutSession.user_id)).label("unique_users"),
            )
            .join(ExerciseLog, ExerciseLog.exercise_id == Exercise.id)
            .join(WorkoutSession, ExerciseLog.session_id == WorkoutSession.id)
            .group_by(Exercise.id, Exercise.name, Exercise.category)
            .order_by(func.count(ExerciseLog.id).desc(), Exercise.name)
            .limit(limit)
        )
        return [dict(row._mapping) for row in self.db.execute(stmt).all()]
