from pydantic import BaseModel, Field, computed_field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from app.core.base import new_id
from app.models.food import FoodSourceEnum, MealTypeEnum
from app.schemas.macros import MacroNutrients


class SearchTier(str, Enum):
    history = "history"
    bundled = "bundled"
    cache = "cache"
    remote = "remote"
    fallback = "fallback"


SOURCE_LABELS = {
    SearchTier.history: "Recent",
    SearchTier.bundled: "Common",
    SearchTier.cache: "Database",
    SearchTier.remote: "Database",
    SearchTier.fallback: "Estimate",
}


class CatalogProduct(BaseModel):
    """One product as returned by the remote nutrition catalog, per 100 g."""
    name: str
    barcode: Optional[str] = None
    brand: Optional[str] = None
    calories_per_100g: float = 0
    protein_per_100g: float = 0
    carbs_per_100g: float = 0
    fat_per_100g: float = 0
    fiber_per_100g: Optional[float] = None
    sugar_per_100g: Optional[float] = None


class FoodSearchItem(BaseModel):
    """Transient search hit; only materialized as a FoodItem when picked."""
    id: str = Field(default_factory=new_id)
    name: str
    barcode: Optional[str] = None
    brand: Optional[str] = None
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: Optional[float] = None
    sugar_per_100g: Optional[float] = None
    source: FoodSourceEnum
    is_estimate: bool = False

    class Config:
        from_attributes = True

    @classmethod
    def from_catalog(cls, product: CatalogProduct) -> "FoodSearchItem":
        return cls(source=FoodSourceEnum.catalog, **product.model_dump())


class SearchResult(BaseModel):
    tier: SearchTier
    item: FoodSearchItem

    @computed_field
    @property
    def source_label(self) -> str:
        return SOURCE_LABELS[self.tier]


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult]
    total_count: int


class LogFoodRequest(BaseModel):
    food_item_id: str
    serving_grams: float = Field(gt=0)
    meal_type: MealTypeEnum
    logged_at: Optional[datetime] = None


class QuickMealRequest(BaseModel):
    name: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    meal_type: MealTypeEnum


class LogRecipeRequest(BaseModel):
    recipe_id: str
    servings: float = Field(default=1, gt=0)
    meal_type: MealTypeEnum


class RecipeIngredientCreate(BaseModel):
    food_item_id: str
    amount_grams: float = Field(gt=0)


class RecipeCreate(BaseModel):
    name: str
    description: Optional[str] = None
    servings: int = Field(default=1, ge=1)
    prep_time_minutes: Optional[int] = None
    ingredients: List[RecipeIngredientCreate]


class FavoriteUpdate(BaseModel):
    is_favorite: bool


class FoodItemRead(BaseModel):
    id: str
    name: str
    barcode: Optional[str] = None
    brand: Optional[str] = None
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: Optional[float] = None
    sugar_per_100g: Optional[float] = None
    source: FoodSourceEnum
    last_used: Optional[datetime] = None
    use_count: int
    is_favorite: bool
    is_high_protein: bool

    class Config:
        from_attributes = True


class LoggedFoodRead(BaseModel):
    id: str
    name: Optional[str] = None
    serving_grams: float
    logged_at: datetime
    meal_type: MealTypeEnum
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    food_item_id: Optional[str] = None
    recipe_id: Optional[str] = None

    class Config:
        from_attributes = True


class RecipeRead(BaseModel):
    id: str
    name: str
    servings: int
    use_count: int
    total_macros: MacroNutrients
    macros_per_serving: MacroNutrients

    class Config:
        from_attributes = True
