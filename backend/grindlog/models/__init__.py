# Import all models here
from grindlog.models.user import User
from grindlog.models.exercise import Exercise
from grindlog.models.workout import WorkoutPlan, WorkoutPlanExercise, WorkoutSession, ExerciseLog, CardioSession
from grindlog.models.progress import BodyMeasurement, UserGoal, ExerciseProgress
from grindlog.models.diet import FoodItem, DietLog
from grindlog.models.nutrition import NutritionTarget, Meal, MealItem, NutritionPlan, MealTemplate, MealTemplateItem
from grindlog.models.supplement import Supplement, SupplementLog
from grindlog.models.routine import Routine, RoutineCompletion
from grindlog.models.cardio import CardioProtocol, CardioProtocolLog
from grindlog.models.template import WorkoutTemplate
from grindlog.models.group import Group, GroupMember, SharingSetting
from grindlog.models.schedule import WeeklySchedule, ScheduleDayExercise, AiRecommendation
