# chefcam/models/recipe.py
from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

Difficulty = Literal["Easy", "Medium", "Hard"]

DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")

# Fallbacks for every text field of a recipe, keyed by the wire name.
RECIPE_DEFAULTS: Dict[str, str] = {
    "dishName": "Unknown Dish",
    "shortDescription": "A delicious dish recreated from your photo.",
    "cuisine": "Fusion",
    "difficulty": "Medium",
    "servings": "2-3",
    "prepTime": "20 min",
    "cookTime": "30 min",
    "caloriesPerServing": "Approx. 450 kcal",
}

INGREDIENT_DEFAULTS: Dict[str, str] = {
    "item": "Ingredient",
    "amount": "To taste",
}


class Ingredient(BaseModel):
    item: str = INGREDIENT_DEFAULTS["item"]
    amount: str = INGREDIENT_DEFAULTS["amount"]


class Recipe(BaseModel):
    dishName: str = Field(default=RECIPE_DEFAULTS["dishName"], min_length=1)
    shortDescription: str = RECIPE_DEFAULTS["shortDescription"]
    cuisine: str = RECIPE_DEFAULTS["cuisine"]
    difficulty: Difficulty = "Medium"
    servings: str = RECIPE_DEFAULTS["servings"]
    prepTime: str = RECIPE_DEFAULTS["prepTime"]
    cookTime: str = RECIPE_DEFAULTS["cookTime"]
    caloriesPerServing: str = RECIPE_DEFAULTS["caloriesPerServing"]
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    platingTips: List[str] = Field(default_factory=list)


class RawRecipe(BaseModel):
    """Whatever the model sent back, one optional slot per recipe field."""

    dishName: Any = None
    shortDescription: Any = None
    cuisine: Any = None
    difficulty: Any = None
    servings: Any = None
    prepTime: Any = None
    cookTime: Any = None
    caloriesPerServing: Any = None
    ingredients: Any = None
    instructions: Any = None
    platingTips: Any = None

    model_config = {"extra": "ignore"}


class ErrorResponse(BaseModel):
    error: str
