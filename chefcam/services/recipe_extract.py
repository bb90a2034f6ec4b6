# chefcam/services/recipe_extract.py
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from chefcam.core.text import json_candidate, strip_code_fences
from chefcam.models.recipe import (
    DIFFICULTIES,
    INGREDIENT_DEFAULTS,
    RECIPE_DEFAULTS,
    Ingredient,
    RawRecipe,
    Recipe,
)

log = logging.getLogger("chefcam.extract")


class MalformedResponse(ValueError):
    """The model answer holds no parseable JSON object."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_model_json(raw: Optional[str]) -> Any:
    cleaned = strip_code_fences(raw)
    candidate = json_candidate(cleaned)
    try:
        return json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # ValueError also covers JSONDecodeError and oversized integers
        raise MalformedResponse(f"Model did not return valid JSON: {e}", raw=raw or "") from e


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    # bool is an int subclass; true/false are not meaningful text here
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    coerced = [_coerce_text(v) for v in value]
    return [s for s in coerced if s]


def _ingredients(value: Any) -> List[Ingredient]:
    if not isinstance(value, list):
        return []
    out: List[Ingredient] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        out.append(
            Ingredient(
                item=_text(entry.get("item"), INGREDIENT_DEFAULTS["item"]),
                amount=_text(entry.get("amount"), INGREDIENT_DEFAULTS["amount"]),
            )
        )
    return out


def to_recipe(payload: Any) -> Recipe:
    """
    Map a decoded model answer onto a fully populated Recipe.

    Every field is resolved on its own: a bad value falls back to its default
    without affecting the rest. Anything that is not a JSON object decodes to
    an empty RawRecipe, so the result is all defaults.
    """
    raw = RawRecipe.model_validate(payload) if isinstance(payload, dict) else RawRecipe()

    difficulty = raw.difficulty if raw.difficulty in DIFFICULTIES else RECIPE_DEFAULTS["difficulty"]

    recipe = Recipe(
        dishName=_text(raw.dishName, RECIPE_DEFAULTS["dishName"]),
        shortDescription=_text(raw.shortDescription, RECIPE_DEFAULTS["shortDescription"]),
        cuisine=_text(raw.cuisine, RECIPE_DEFAULTS["cuisine"]),
        difficulty=difficulty,
        servings=_text(raw.servings, RECIPE_DEFAULTS["servings"]),
        prepTime=_text(raw.prepTime, RECIPE_DEFAULTS["prepTime"]),
        cookTime=_text(raw.cookTime, RECIPE_DEFAULTS["cookTime"]),
        caloriesPerServing=_text(raw.caloriesPerServing, RECIPE_DEFAULTS["caloriesPerServing"]),
        ingredients=_ingredients(raw.ingredients),
        instructions=_text_list(raw.instructions),
        platingTips=_text_list(raw.platingTips),
    )

    missing = [k for k, v in raw.model_dump().items() if v is None]
    if missing:
        log.debug("recipe fields defaulted", extra={"fields": missing})
    return recipe


def extract(raw: Optional[str]) -> Recipe:
    return to_recipe(parse_model_json(raw))
