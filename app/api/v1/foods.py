from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.dependencies import get_food_search_service, get_nutrition_service
from app.models.food import MealTypeEnum
from app.schemas.food import (
    FavoriteUpdate,
    FoodItemRead,
    LogFoodRequest,
    LoggedFoodRead,
    LogRecipeRequest,
    QuickMealRequest,
    RecipeCreate,
    RecipeRead,
    SearchResponse,
    SearchResult,
)
from app.services.food_search_service import FoodSearchService
from app.services.nutrition_service import NutritionService

router = APIRouter(prefix="/foods", tags=["foods"])


# ==========================
# SEARCH
# ==========================

@router.get("/search", response_model=SearchResponse)
async def search_foods(
        q: str = Query("", description="Free-text food name"),
        search: FoodSearchService = Depends(get_food_search_service),
):
    results = await search.search(q)
    return SearchResponse(query=q, results=results, total_count=len(results))


@router.get("/barcode/{barcode}", response_model=SearchResult)
async def lookup_barcode(
        barcode: str,
        search: FoodSearchService = Depends(get_food_search_service),
):
    """Local store first, then OpenFoodFacts. 503 when the catalog is unreachable."""
    result = await search.search_by_barcode(barcode)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No product with barcode {barcode}")
    return result


@router.post("/select", response_model=FoodItemRead, status_code=status.HTTP_201_CREATED)
async def select_search_result(
        result: SearchResult,
        search: FoodSearchService = Depends(get_food_search_service),
):
    """Turn a picked search hit into a stored food that can be logged."""
    return await search.select_result(result)


# ==========================
# LOGGING
# ==========================

@router.post("/log", response_model=LoggedFoodRead, status_code=status.HTTP_201_CREATED)
async def log_food(
        request: LogFoodRequest,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.log_food(
        request.food_item_id,
        request.serving_grams,
        request.meal_type,
        logged_at=request.logged_at,
    )


@router.post("/quick-meal", response_model=LoggedFoodRead, status_code=status.HTTP_201_CREATED)
async def log_quick_meal(
        request: QuickMealRequest,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.log_quick_meal(
        request.name, request.calories, request.protein, request.carbs, request.fat, request.meal_type
    )


@router.post("/log-recipe", response_model=LoggedFoodRead, status_code=status.HTTP_201_CREATED)
async def log_recipe(
        request: LogRecipeRequest,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.log_recipe(request.recipe_id, request.servings, request.meal_type)


@router.get("/logged", response_model=List[LoggedFoodRead])
async def logged_foods(
        day: Optional[date] = None,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.logged_foods_for_date(day or date.today())


@router.delete("/logged/{logged_food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_logged_food(
        logged_food_id: str,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    await nutrition.delete_logged_food(logged_food_id)


# ==========================
# QUICK ACCESS
# ==========================

@router.get("/recent", response_model=List[FoodItemRead])
async def recent_foods(nutrition: NutritionService = Depends(get_nutrition_service)):
    return await nutrition.recent_foods()


@router.get("/favorites", response_model=List[FoodItemRead])
async def favorite_foods(nutrition: NutritionService = Depends(get_nutrition_service)):
    return await nutrition.favorite_foods()


@router.get("/suggestions/{meal_type}", response_model=List[FoodItemRead])
async def meal_type_suggestions(
        meal_type: MealTypeEnum,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.suggestions_for_meal_type(meal_type)


@router.put("/{food_item_id}/favorite", response_model=FoodItemRead)
async def set_favorite(
        food_item_id: str,
        update: FavoriteUpdate,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.set_favorite(food_item_id, update.is_favorite)


# ==========================
# RECIPES
# ==========================

@router.get("/recipes", response_model=List[RecipeRead])
async def list_recipes(nutrition: NutritionService = Depends(get_nutrition_service)):
    return await nutrition.list_recipes()


@router.post("/recipes", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
async def create_recipe(
        recipe: RecipeCreate,
        nutrition: NutritionService = Depends(get_nutrition_service),
):
    return await nutrition.create_recipe(recipe)
