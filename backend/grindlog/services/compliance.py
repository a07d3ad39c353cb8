"""
Compliance Service
------------------
Derived metrics for the dashboard: compliance score, streaks, exercise
progression and nutrition remaining.

Pure arithmetic over rows that were already fetched; nothing here touches the
database, so every function can be called from handlers and tests alike.
"""
import math
import re
from collections import OrderedDict
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

# Daily targets that count as 100%
WORKOUT_TARGET = 20          # workouts in the last 30 days
ROUTINE_TARGET = 2           # routines completed today (morning + evening)
CALORIE_TARGET = 2500        # kcal logged today

# Weights of each sub-score; they sum to 100
WORKOUT_WEIGHT = 30
SUPPLEMENT_WEIGHT = 25
ROUTINE_WEIGHT = 25
NUTRITION_WEIGHT = 20

STREAK_WINDOW_DAYS = 30
WEEKLY_EXPECTED_FALLBACK = 2

MACROS = ("calories", "protein", "carbs", "fat")

_TIMES_PER_DAY = re.compile(r"(\d+)\s*x", re.IGNORECASE)
_WORD_COUNTS = {"once": 1, "twice": 2, "thrice": 3}


@dataclass
class ComplianceScore:
    workout: float
    supplement: float
    routine: float
    nutrition: float
    overall: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def compliance_score(
    workout_count: int,
    supplements_complete: int,
    total_supplements: int,
    routines_completed_today: int,
    calories_logged: float,
) -> ComplianceScore:
    """
    Weighted daily adherence score.

    workout    = min(workouts / 20, 1) * 100
    supplement = complete / max(total, 1) * 100
    routine    = min(routines / 2, 1) * 100
    nutrition  = min(calories / 2500, 1) * 100, or 0 when nothing was logged
    overall    = (workout*30 + supplement*25 + routine*25 + nutrition*20) / 100
    """
    workout = _clamp(min(workout_count / WORKOUT_TARGET, 1) * 100)
    supplement = _clamp(supplements_complete / max(total_supplements, 1) * 100)
    routine = _clamp(min(routines_completed_today / ROUTINE_TARGET, 1) * 100)
    nutrition = _clamp(min(calories_logged / CALORIE_TARGET, 1) * 100) if calories_logged > 0 else 0.0

    overall = (
        workout * WORKOUT_WEIGHT
        + supplement * SUPPLEMENT_WEIGHT
        + routine * ROUTINE_WEIGHT
        + nutrition * NUTRITION_WEIGHT
    ) / 100

    return ComplianceScore(
        workout=workout,
        supplement=supplement,
        routine=routine,
        nutrition=nutrition,
        overall=int(math.floor(overall + 0.5)),
    )


def calculate_streak(active_days: Iterable[date], today: date, window: int = STREAK_WINDOW_DAYS) -> int:
    """
    Count consecutive days with at least one log, walking back from today.

    A day without logs ends the streak, except today: an empty today still
    counts the run that ended yesterday.
    """
    days = set(active_days)
    streak = 0
    for i in range(window):
        day = today - timedelta(days=i)
        if day in days:
            streak += 1
        elif i > 0:
            break
    return streak


def exercise_progression(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Reduce time-ordered log rows to one entry per calendar date.

    Each row needs "date" (a date), "weight" and "reps". The heaviest entry of
    a date wins; on equal weight the first one seen is kept.
    """
    by_date: "OrderedDict[date, Dict[str, Any]]" = OrderedDict()
    for row in rows:
        day = row["date"]
        weight = row.get("weight")
        current = by_date.get(day)
        if current is None or (weight and weight > current["maxWeight"]):
            by_date[day] = {"maxWeight": weight or 0, "maxReps": row.get("reps") or 0}

    return [{"date": day.isoformat(), **values} for day, values in by_date.items()]


def nutrition_remaining(targets: Mapping[str, float], consumed: Mapping[str, float]) -> Dict[str, float]:
    """target - consumed per macro. Negative means over target."""
    return {macro: (targets.get(macro) or 0) - (consumed.get(macro) or 0) for macro in MACROS}


def expected_doses(frequency: Optional[str]) -> int:
    """
    Doses per day implied by a supplement's frequency text.

    "2x daily" -> 2, "twice a day" -> 2, anything unrecognised -> 1.
    """
    if not frequency:
        return 1
    match = _TIMES_PER_DAY.search(frequency)
    if match:
        return max(int(match.group(1)), 1)
    lowered = frequency.lower()
    for word, count in _WORD_COUNTS.items():
        if word in lowered:
            return count
    return 1


def weekly_supplement_series(log_days: Sequence[date], today: date, tracked_supplements: int) -> List[Dict[str, Any]]:
    """
    Doses taken per day over the last 7 days, oldest first.

    `log_days` holds one date per supplement log row.
    """
    expected = tracked_supplements or WEEKLY_EXPECTED_FALLBACK
    series = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        series.append(
            {
                "date": day.isoformat(),
                "day": day.strftime("%a"),
                "taken": sum(1 for logged in log_days if logged == day),
                "expected": expected,
            }
        )
    return series
