from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, func, update

from app.models.food import FoodItem, FoodSourceEnum, LoggedFood, MealTypeEnum, Recipe, RecipeIngredient
from app.repositories.base import BaseRepository, degrade_to
from app.schemas.food import FoodSearchItem


def _name_contains(query: str):
    return func.lower(FoodItem.name).contains(query.lower(), autoescape=True)


_BY_USAGE = (FoodItem.use_count.desc(), FoodItem.last_used.desc().nulls_last())


class FoodRepository(BaseRepository):
    # ------------------------------------------------------------------
    # Search tiers
    # ------------------------------------------------------------------

    @degrade_to(list)
    async def history_matches(self, query: str, limit: int) -> List[FoodItem]:
        result = await self.db.execute(
            select(FoodItem)
            .where(FoodItem.source == FoodSourceEnum.user_history, _name_contains(query))
            .order_by(*_BY_USAGE)
            .limit(limit)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def cached_matches(self, query: str, fresh_since: datetime, limit: int) -> List[FoodItem]:
        result = await self.db.execute(
            select(FoodItem)
            .where(
                FoodItem.source == FoodSourceEnum.catalog,
                FoodItem.last_used >= fresh_since,
                _name_contains(query),
            )
            .order_by(*_BY_USAGE)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_barcode(self, barcode: str) -> Optional[FoodItem]:
        result = await self.db.execute(select(FoodItem).where(FoodItem.barcode == barcode).limit(1))
        return result.scalar_one_or_none()

    async def get_by_id(self, food_item_id: str) -> Optional[FoodItem]:
        result = await self.db.execute(select(FoodItem).where(FoodItem.id == food_item_id))
        return result.scalar_one_or_none()

    async def get_history_item_by_name(self, name: str) -> Optional[FoodItem]:
        result = await self.db.execute(
            select(FoodItem)
            .where(FoodItem.source == FoodSourceEnum.user_history, func.lower(FoodItem.name) == name.lower())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def upsert_catalog_item(self, item: FoodSearchItem, now: datetime) -> FoodItem:
        """Write a remote hit into the cache tier: match by barcode when present, else by id."""
        existing = None
        if item.barcode:
            existing = await self.get_by_barcode(item.barcode)
        if existing is None:
            existing = await self.get_by_id(item.id)

        if existing is not None:
            existing.last_used = now
            await self.commit()
            return existing

        row = FoodItem(
            id=item.id,
            name=item.name,
            barcode=item.barcode,
            brand=item.brand,
            calories_per_100g=item.calories_per_100g,
            protein_per_100g=item.protein_per_100g,
            carbs_per_100g=item.carbs_per_100g,
            fat_per_100g=item.fat_per_100g,
            fiber_per_100g=item.fiber_per_100g,
            sugar_per_100g=item.sugar_per_100g,
            source=FoodSourceEnum.catalog,
            last_used=now,
            use_count=0,
            is_favorite=False,
        )
        self.db.add(row)
        await self.commit()
        return row

    async def add(self, item: FoodItem) -> FoodItem:
        self.db.add(item)
        await self.commit()
        return item

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @degrade_to(list)
    async def recent(self, limit: int) -> List[FoodItem]:
        result = await self.db.execute(
            select(FoodItem)
            .where(FoodItem.last_used.is_not(None))
            .order_by(FoodItem.last_used.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def favorites(self) -> List[FoodItem]:
        result = await self.db.execute(
            select(FoodItem).where(FoodItem.is_favorite.is_(True)).order_by(FoodItem.name)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def meal_type_frequency(self, meal_type: MealTypeEnum, limit: int) -> List[Tuple[FoodItem, int]]:
        """FoodItems most often logged under ``meal_type``, with their log counts."""
        times_logged = func.count(LoggedFood.id).label("times_logged")
        result = await self.db.execute(
            select(FoodItem, times_logged)
            .join(LoggedFood, LoggedFood.food_item_id == FoodItem.id)
            .where(LoggedFood.meal_type == meal_type)
            .group_by(FoodItem.id)
            .order_by(times_logged.desc(), FoodItem.name)
            .limit(limit)
        )
        return [(row[0], row[1]) for row in result.all()]

    # ------------------------------------------------------------------
    # Logged foods
    # ------------------------------------------------------------------

    async def logged_food_by_id(self, logged_food_id: str) -> Optional[LoggedFood]:
        result = await self.db.execute(select(LoggedFood).where(LoggedFood.id == logged_food_id))
        return result.scalar_one_or_none()

    async def delete_logged_food(self, entry: LoggedFood) -> None:
        await self.db.delete(entry)
        await self.commit()

    async def delete_food_item(self, item: FoodItem) -> None:
        """Delete a food; logged entries and recipe ingredients keep their cached data."""
        await self.db.execute(
            update(LoggedFood).where(LoggedFood.food_item_id == item.id).values(food_item_id=None)
        )
        await self.db.execute(
            update(RecipeIngredient).where(RecipeIngredient.food_item_id == item.id).values(food_item_id=None)
        )
        await self.db.delete(item)
        await self.commit()

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    async def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        result = await self.db.execute(select(Recipe).where(Recipe.id == recipe_id))
        return result.scalar_one_or_none()

    async def add_recipe(self, recipe: Recipe) -> Recipe:
        self.db.add(recipe)
        await self.commit()
        return await self.get_recipe(recipe.id)

    async def list_recipes(self) -> List[Recipe]:
        result = await self.db.execute(
            select(Recipe).order_by(Recipe.use_count.desc(), Recipe.name)
        )
        return list(result.scalars().all())
