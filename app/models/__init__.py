from app.models.user import UserProfile
from app.models.exercise import Exercise
from app.models.workout import Workout, WorkoutSet
from app.models.food import FoodItem, LoggedFood, Recipe, RecipeIngredient
from app.models.daily_summary import DailySummary
from app.models.biometric import BiometricEntry

__all__ = [
    "UserProfile",
    "Exercise",
    "Workout", "WorkoutSet",
    "FoodItem", "LoggedFood", "Recipe", "RecipeIngredient",
    "DailySummary",
    "BiometricEntry",
]
