import enum
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.core.base import Base, new_id
from app.schemas.macros import MacroNutrients, per_100g_macros

HIGH_PROTEIN_PER_100G = 25.0

class FoodSourceEnum(str, enum.Enum):
    user_history = "user_history"
    bundled = "bundled"
    catalog = "catalog"
    manual = "manual"

class MealTypeEnum(str, enum.Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"
    pre_workout = "pre_workout"
    post_workout = "post_workout"

class FoodItem(Base):
    """Food with macros per 100 g; doubles as the search cache for catalog hits."""
    __tablename__ = "food_items"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    barcode = Column(String(64), nullable=True, index=True)
    brand = Column(String(255), nullable=True)

    calories_per_100g = Column(Float, nullable=False)
    protein_per_100g = Column(Float, nullable=False)
    carbs_per_100g = Column(Float, nullable=False)
    fat_per_100g = Column(Float, nullable=False)
    fiber_per_100g = Column(Float, nullable=True)
    sugar_per_100g = Column(Float, nullable=True)

    source = Column(Enum(FoodSourceEnum), nullable=False, default=FoodSourceEnum.user_history)
    last_used = Column(DateTime, nullable=True)
    use_count = Column(Integer, nullable=False, default=0)
    is_favorite = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_food_items_source_usage", "source", "use_count", "last_used"),
    )

    def macros_for_serving(self, grams: float) -> MacroNutrients:
        return per_100g_macros(self, grams)

    @property
    def is_high_protein(self) -> bool:
        return self.protein_per_100g >= HIGH_PROTEIN_PER_100G

    def mark_used(self, at) -> None:
        self.last_used = at
        self.use_count = (self.use_count or 0) + 1

class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    is_favorite = Column(Boolean, nullable=False, default=False)
    servings = Column(Integer, nullable=False, default=1)
    prep_time_minutes = Column(Integer, nullable=True)
    last_used = Column(DateTime, nullable=True)
    use_count = Column(Integer, nullable=False, default=0)

    ingredients = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan", lazy="selectin"
    )

    @property
    def total_macros(self) -> MacroNutrients:
        total = MacroNutrients()
        for ingredient in self.ingredients:
            if ingredient.food_item is not None:
                total = total + ingredient.food_item.macros_for_serving(ingredient.amount_grams)
        return total

    @property
    def macros_per_serving(self) -> MacroNutrients:
        return self.total_macros.scaled(1.0 / max(self.servings or 1, 1))

    def mark_used(self, at) -> None:
        self.last_used = at
        self.use_count = (self.use_count or 0) + 1

class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"

    id = Column(String(36), primary_key=True, default=new_id)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id = Column(String(36), ForeignKey("food_items.id", ondelete="SET NULL"), nullable=True)
    amount_grams = Column(Float, nullable=False)
    notes = Column(String, nullable=True)

    recipe = relationship("Recipe", back_populates="ingredients")
    food_item = relationship("FoodItem", lazy="selectin")

class LoggedFood(Base):
    """A logged portion. Macros are cached so they survive deletion of the source food."""
    __tablename__ = "logged_foods"

    id = Column(String(36), primary_key=True, default=new_id)
    daily_summary_id = Column(String(36), ForeignKey("daily_summaries.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id = Column(String(36), ForeignKey("food_items.id", ondelete="SET NULL"), nullable=True, index=True)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True)

    name = Column(String(255), nullable=True)
    serving_grams = Column(Float, nullable=False)
    logged_at = Column(DateTime, nullable=False)
    meal_type = Column(Enum(MealTypeEnum), nullable=False)
    notes = Column(String, nullable=True)

    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)

    daily_summary = relationship("DailySummary", back_populates="logged_foods")
    food_item = relationship("FoodItem", lazy="selectin")

    @classmethod
    def from_macros(cls, macros: MacroNutrients, **fields) -> "LoggedFood":
        values = dict(
            id=new_id(),
            food_item_id=None,
            recipe_id=None,
            notes=None,
            calories=macros.calories,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
            fiber=macros.fiber,
        )
        values.update(fields)
        return cls(**values)
