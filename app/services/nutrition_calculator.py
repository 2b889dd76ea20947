from typing import Dict, Optional

from app.models.user import UserProfile


class NutritionCalculator:
    ACTIVITY_MULTIPLIERS = {
        "low": 1.2,
        "medium": 1.55,
        "high": 1.9
    }

    MACRO_RATIOS = {
        "weight_loss": {"protein": 0.35, "carbs": 0.40, "fat": 0.25},
        "maintenance": {"protein": 0.30, "carbs": 0.40, "fat": 0.30},
        "muscle_gain": {"protein": 0.35, "carbs": 0.45, "fat": 0.20}
    }

    GOAL_CALORIE_FACTORS = {
        "weight_loss": 0.85,
        "maintenance": 1.0,
        "muscle_gain": 1.10
    }

    @classmethod
    def calculate_bmr(cls, weight: float, height: float, age: int, sex: str) -> float:
        """Mifflin-St Jeor."""
        if sex == "female":
            return 10 * weight + 6.25 * height - 5 * age - 161
        else:
            return 10 * weight + 6.25 * height - 5 * age + 5

    @classmethod
    def calculate_tdee(cls, bmr: float, activity_level: str) -> float:
        multiplier = cls.ACTIVITY_MULTIPLIERS.get(activity_level, 1.55)
        return bmr * multiplier

    @classmethod
    def calculate_macros(cls, calories: int, goal: str = "maintenance") -> Dict[str, int]:
        ratios = cls.MACRO_RATIOS.get(goal, cls.MACRO_RATIOS["maintenance"])

        protein_g = int((calories * ratios["protein"]) / 4)
        carbs_g = int((calories * ratios["carbs"]) / 4)
        fat_g = int((calories * ratios["fat"]) / 9)

        return {
            "protein": protein_g,
            "carbs": carbs_g,
            "fat": fat_g
        }

    @classmethod
    def recommended_targets(cls, profile: UserProfile) -> Optional[Dict[str, int]]:
        """Daily calorie and macro targets, or None when body metrics are incomplete."""
        if not all([profile.body_weight, profile.height, profile.age]):
            return None

        sex = profile.biological_sex.value if profile.biological_sex else "male"
        activity = profile.activity_level.value if profile.activity_level else "medium"
        goal = profile.primary_goal.value if profile.primary_goal else "maintenance"

        bmr = cls.calculate_bmr(
            weight=profile.body_weight,
            height=profile.height,
            age=profile.age,
            sex=sex,
        )
        calories = int(cls.calculate_tdee(bmr, activity) * cls.GOAL_CALORIE_FACTORS[goal])

        return {"calories": calories, **cls.calculate_macros(calories, goal)}
