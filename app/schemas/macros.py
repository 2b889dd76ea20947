from pydantic import BaseModel


class MacroNutrients(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0

    def __add__(self, other: "MacroNutrients") -> "MacroNutrients":
        return MacroNutrients(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
            sugar=self.sugar + other.sugar,
        )

    def scaled(self, factor: float) -> "MacroNutrients":
        return MacroNutrients(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            fiber=self.fiber * factor,
            sugar=self.sugar * factor,
        )


def per_100g_macros(source, grams: float) -> MacroNutrients:
    """Scale any object exposing ``*_per_100g`` attributes to ``grams``."""
    return MacroNutrients(
        calories=source.calories_per_100g,
        protein=source.protein_per_100g,
        carbs=source.carbs_per_100g,
        fat=source.fat_per_100g,
        fiber=source.fiber_per_100g or 0,
        sugar=source.sugar_per_100g or 0,
    ).scaled(grams / 100.0)
