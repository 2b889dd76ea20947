"""
Bundled staple foods for the "Common" search tier.
Values are per 100 g of the food as usually eaten (cooked grains, raw produce).
Sources: USDA FoodData Central.
"""
from typing import Tuple

from app.models.food import FoodSourceEnum
from app.schemas.food import FoodSearchItem

_STAPLE_DATA = [
    # Protein
    {"name": "Chicken Breast, Grilled", "calories": 165, "protein": 31.0, "carbs": 0.0, "fat": 3.6, "fiber": 0.0},
    {"name": "Chicken Thigh, Roasted", "calories": 209, "protein": 26.0, "carbs": 0.0, "fat": 10.9, "fiber": 0.0},
    {"name": "Turkey Breast", "calories": 135, "protein": 30.0, "carbs": 0.0, "fat": 1.0, "fiber": 0.0},
    {"name": "Ground Beef 90% Lean", "calories": 217, "protein": 26.1, "carbs": 0.0, "fat": 11.8, "fiber": 0.0},
    {"name": "Sirloin Steak", "calories": 206, "protein": 29.0, "carbs": 0.0, "fat": 9.0, "fiber": 0.0},
    {"name": "Pork Tenderloin", "calories": 143, "protein": 26.0, "carbs": 0.0, "fat": 3.5, "fiber": 0.0},
    {"name": "Salmon, Atlantic", "calories": 208, "protein": 20.0, "carbs": 0.0, "fat": 13.0, "fiber": 0.0},
    {"name": "Tuna, Canned in Water", "calories": 116, "protein": 25.5, "carbs": 0.0, "fat": 0.8, "fiber": 0.0},
    {"name": "Cod", "calories": 82, "protein": 18.0, "carbs": 0.0, "fat": 0.7, "fiber": 0.0},
    {"name": "Shrimp", "calories": 99, "protein": 24.0, "carbs": 0.2, "fat": 0.3, "fiber": 0.0},
    {"name": "Whole Egg", "calories": 155, "protein": 13.0, "carbs": 1.1, "fat": 11.0, "fiber": 0.0},
    {"name": "Egg White", "calories": 52, "protein": 10.9, "carbs": 0.7, "fat": 0.2, "fiber": 0.0},
    {"name": "Tofu, Firm", "calories": 144, "protein": 17.3, "carbs": 2.8, "fat": 8.7, "fiber": 2.3},
    {"name": "Whey Protein Powder", "calories": 400, "protein": 80.0, "carbs": 8.0, "fat": 6.0, "fiber": 0.0},
    # Dairy
    {"name": "Greek Yogurt, Nonfat", "calories": 59, "protein": 10.2, "carbs": 3.6, "fat": 0.4, "fiber": 0.0},
    {"name": "Cottage Cheese, Low Fat", "calories": 72, "protein": 12.4, "carbs": 2.7, "fat": 1.0, "fiber": 0.0},
    {"name": "Milk, 2%", "calories": 50, "protein": 3.3, "carbs": 4.8, "fat": 2.0, "fiber": 0.0},
    {"name": "Cheddar Cheese", "calories": 403, "protein": 24.9, "carbs": 1.3, "fat": 33.1, "fiber": 0.0},
    # Grains and starches
    {"name": "White Rice, Cooked", "calories": 130, "protein": 2.7, "carbs": 28.2, "fat": 0.3, "fiber": 0.4},
    {"name": "Brown Rice, Cooked", "calories": 123, "protein": 2.7, "carbs": 25.6, "fat": 1.0, "fiber": 1.6},
    {"name": "Pasta, Cooked", "calories": 131, "protein": 5.0, "carbs": 25.0, "fat": 1.1, "fiber": 1.8},
    {"name": "Oats, Rolled", "calories": 389, "protein": 16.9, "carbs": 66.3, "fat": 6.9, "fiber": 10.6},
    {"name": "Whole Wheat Bread", "calories": 247, "protein": 13.0, "carbs": 41.0, "fat": 4.2, "fiber": 6.0},
    {"name": "Bagel, Plain", "calories": 257, "protein": 10.0, "carbs": 50.0, "fat": 1.6, "fiber": 2.2},
    {"name": "Potato, Baked", "calories": 93, "protein": 2.5, "carbs": 21.2, "fat": 0.1, "fiber": 2.2},
    {"name": "Sweet Potato, Baked", "calories": 90, "protein": 2.0, "carbs": 20.7, "fat": 0.2, "fiber": 3.3},
    {"name": "Quinoa, Cooked", "calories": 120, "protein": 4.4, "carbs": 21.3, "fat": 1.9, "fiber": 2.8},
    {"name": "Black Beans, Cooked", "calories": 132, "protein": 8.9, "carbs": 23.7, "fat": 0.5, "fiber": 8.7},
    {"name": "Lentils, Cooked", "calories": 116, "protein": 9.0, "carbs": 20.1, "fat": 0.4, "fiber": 7.9},
    # Fruit
    {"name": "Banana", "calories": 89, "protein": 1.1, "carbs": 22.8, "fat": 0.3, "fiber": 2.6},
    {"name": "Apple", "calories": 52, "protein": 0.3, "carbs": 13.8, "fat": 0.2, "fiber": 2.4},
    {"name": "Orange", "calories": 47, "protein": 0.9, "carbs": 11.8, "fat": 0.1, "fiber": 2.4},
    {"name": "Blueberries", "calories": 57, "protein": 0.7, "carbs": 14.5, "fat": 0.3, "fiber": 2.4},
    {"name": "Strawberries", "calories": 32, "protein": 0.7, "carbs": 7.7, "fat": 0.3, "fiber": 2.0},
    # Vegetables
    {"name": "Broccoli", "calories": 34, "protein": 2.8, "carbs": 6.6, "fat": 0.4, "fiber": 2.6},
    {"name": "Spinach", "calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4, "fiber": 2.2},
    {"name": "Carrots", "calories": 41, "protein": 0.9, "carbs": 9.6, "fat": 0.2, "fiber": 2.8},
    {"name": "Bell Pepper", "calories": 31, "protein": 1.0, "carbs": 6.0, "fat": 0.3, "fiber": 2.1},
    {"name": "Mixed Salad Greens", "calories": 17, "protein": 1.2, "carbs": 3.3, "fat": 0.2, "fiber": 2.1},
    # Fats
    {"name": "Avocado", "calories": 160, "protein": 2.0, "carbs": 8.5, "fat": 14.7, "fiber": 6.7},
    {"name": "Almonds", "calories": 579, "protein": 21.2, "carbs": 21.6, "fat": 49.9, "fiber": 12.5},
    {"name": "Peanut Butter", "calories": 588, "protein": 25.1, "carbs": 20.0, "fat": 50.4, "fiber": 6.0},
    {"name": "Olive Oil", "calories": 884, "protein": 0.0, "carbs": 0.0, "fat": 100.0, "fiber": 0.0},
    {"name": "Butter", "calories": 717, "protein": 0.9, "carbs": 0.1, "fat": 81.1, "fiber": 0.0},
]


def _to_item(data: dict) -> FoodSearchItem:
    return FoodSearchItem(
        name=data["name"],
        calories_per_100g=data["calories"],
        protein_per_100g=data["protein"],
        carbs_per_100g=data["carbs"],
        fat_per_100g=data["fat"],
        fiber_per_100g=data.get("fiber"),
        source=FoodSourceEnum.bundled,
    )


STAPLE_FOODS: Tuple[FoodSearchItem, ...] = tuple(_to_item(d) for d in _STAPLE_DATA)
