"""
Food logging: portions, quick meals and recipes, plus the derived
recent/favorite/meal-type views used to speed up logging.
"""
import asyncio
import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from app.core.base import new_id
from app.core.config import settings
from app.core.errors import InvalidPreconditionError, NotFoundError
from app.models.food import FoodItem, LoggedFood, MealTypeEnum, Recipe, RecipeIngredient
from app.repositories.food_repository import FoodRepository
from app.repositories.summary_repository import SummaryRepository
from app.schemas.food import FoodItemRead, RecipeCreate
from app.schemas.macros import MacroNutrients
from app.services.aggregation_service import AggregationService

logger = logging.getLogger(__name__)

MEAL_SUGGESTIONS_LIMIT = 5

# One logging operation at a time touches a day's summary
_write_lock = asyncio.Lock()


class FoodViewCache:
    """Memoized recent/favorite lists, dropped on every food write."""

    def __init__(self):
        self.recent: Optional[List[FoodItemRead]] = None
        self.favorites: Optional[List[FoodItemRead]] = None

    def invalidate(self) -> None:
        self.recent = None
        self.favorites = None


food_views = FoodViewCache()


class NutritionService:
    def __init__(
        self,
        foods: FoodRepository,
        summaries: SummaryRepository,
        aggregation: AggregationService,
        views: FoodViewCache = food_views,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.foods = foods
        self.summaries = summaries
        self.aggregation = aggregation
        self.views = views
        self.clock = clock

    async def _get_food(self, food_item_id: str) -> FoodItem:
        item = await self.foods.get_by_id(food_item_id)
        if item is None:
            raise NotFoundError("FoodItem", food_item_id)
        return item

    async def _persist_entry(self, entry: LoggedFood) -> LoggedFood:
        """Attach ``entry`` to its day, commit, then rebuild that day's summary."""
        day = entry.logged_at.date()
        summary = await self.aggregation.ensure_summary(day)
        entry.daily_summary = summary
        self.foods.db.add(entry)
        await self.foods.commit()
        self.views.invalidate()
        await self.aggregation.compute_daily_summary(day)
        return entry

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    async def log_food(
        self,
        food_item_id: str,
        serving_grams: float,
        meal_type: MealTypeEnum,
        logged_at: Optional[datetime] = None,
    ) -> LoggedFood:
        if serving_grams is None or serving_grams <= 0:
            raise InvalidPreconditionError("Serving size must be greater than zero")

        async with _write_lock:
            item = await self._get_food(food_item_id)
            now = self.clock()
            entry = LoggedFood.from_macros(
                item.macros_for_serving(serving_grams),
                name=item.name,
                serving_grams=serving_grams,
                logged_at=logged_at or now,
                meal_type=meal_type,
                food_item_id=item.id,
            )
            item.mark_used(now)
            await self._persist_entry(entry)

        logger.info("Logged %.0fg of %s (%s)", serving_grams, item.name, meal_type.value)
        return entry

    async def log_quick_meal(
        self,
        name: str,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
        meal_type: MealTypeEnum,
    ) -> LoggedFood:
        """Log macros directly, without a food item behind them."""
        if min(calories, protein, carbs, fat) < 0:
            raise InvalidPreconditionError("Macros cannot be negative")

        async with _write_lock:
            entry = LoggedFood.from_macros(
                MacroNutrients(calories=calories, protein=protein, carbs=carbs, fat=fat),
                name=name,
                serving_grams=0,
                logged_at=self.clock(),
                meal_type=meal_type,
            )
            await self._persist_entry(entry)
        return entry

    async def log_recipe(self, recipe_id: str, servings: float, meal_type: MealTypeEnum) -> LoggedFood:
        if servings is None or servings <= 0:
            raise InvalidPreconditionError("Servings must be greater than zero")

        async with _write_lock:
            recipe = await self.foods.get_recipe(recipe_id)
            if recipe is None:
                raise NotFoundError("Recipe", recipe_id)

            now = self.clock()
            recipe_grams = sum(i.amount_grams for i in recipe.ingredients)
            entry = LoggedFood.from_macros(
                recipe.macros_per_serving.scaled(servings),
                name=recipe.name,
                serving_grams=recipe_grams / max(recipe.servings or 1, 1) * servings,
                logged_at=now,
                meal_type=meal_type,
                recipe_id=recipe.id,
            )
            recipe.mark_used(now)
            await self._persist_entry(entry)
        return entry

    async def delete_logged_food(self, logged_food_id: str) -> date:
        """Remove a logged entry and rebuild its day. Returns the affected date."""
        async with _write_lock:
            entry = await self.foods.logged_food_by_id(logged_food_id)
            if entry is None:
                raise NotFoundError("LoggedFood", logged_food_id)
            day = entry.logged_at.date()
            await self.foods.delete_logged_food(entry)
            self.views.invalidate()
            await self.aggregation.compute_daily_summary(day)
        return day

    async def logged_foods_for_date(self, day: date) -> List[LoggedFood]:
        return await self.summaries.logged_foods_for_date(day)

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        if not data.ingredients:
            raise InvalidPreconditionError("A recipe needs at least one ingredient")

        recipe = Recipe(
            id=new_id(),
            name=data.name,
            description=data.description,
            servings=data.servings,
            prep_time_minutes=data.prep_time_minutes,
            last_used=None,
            is_favorite=False,
            use_count=0,
        )
        for ingredient in data.ingredients:
            item = await self._get_food(ingredient.food_item_id)
            recipe.ingredients.append(RecipeIngredient(
                id=new_id(),
                food_item=item,
                food_item_id=item.id,
                amount_grams=ingredient.amount_grams,
            ))
        return await self.foods.add_recipe(recipe)

    async def list_recipes(self) -> List[Recipe]:
        return await self.foods.list_recipes()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def recent_foods(self) -> List[FoodItemRead]:
        if self.views.recent is None:
            rows = await self.foods.recent(settings.RECENT_FOODS_LIMIT)
            self.views.recent = [FoodItemRead.model_validate(r) for r in rows]
        return self.views.recent

    async def favorite_foods(self) -> List[FoodItemRead]:
        if self.views.favorites is None:
            rows = await self.foods.favorites()
            self.views.favorites = [FoodItemRead.model_validate(r) for r in rows]
        return self.views.favorites

    async def suggestions_for_meal_type(self, meal_type: MealTypeEnum) -> List[FoodItemRead]:
        """Foods most often logged for this meal."""
        ranked = await self.foods.meal_type_frequency(meal_type, MEAL_SUGGESTIONS_LIMIT)
        return [FoodItemRead.model_validate(item) for item, _ in ranked]

    async def set_favorite(self, food_item_id: str, is_favorite: bool) -> FoodItem:
        item = await self._get_food(food_item_id)
        item.is_favorite = is_favorite
        await self.foods.commit()
        self.views.invalidate()
        return item
