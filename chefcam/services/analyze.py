# chefcam/services/analyze.py
from __future__ import annotations

import logging
import time
from typing import Any

from chefcam.models.recipe import Recipe
from chefcam.services.image_prep import PreparedImage
from chefcam.services.recipe_extract import MalformedResponse, extract

log = logging.getLogger("chefcam.analyze")

RECIPE_PROMPT = """
You are a Michelin-star chef. Analyze this food image and write a recipe to recreate the dish at home.
Return strictly a JSON object (no markdown formatting, no commentary) with this structure:
{
  "dishName": "Name of the dish",
  "shortDescription": "A mouth-watering 1-sentence description.",
  "cuisine": "Cuisine of origin, e.g. Italian",
  "difficulty": "Easy" | "Medium" | "Hard",
  "servings": "e.g. 2-3",
  "prepTime": "e.g. 15 min",
  "cookTime": "e.g. 25 min",
  "caloriesPerServing": "Estimated calories per serving, e.g. Approx. 520 kcal",
  "ingredients": [{"item": "Ingredient name", "amount": "Quantity with unit"}],
  "instructions": ["Step 1...", "Step 2..."],
  "platingTips": ["Tip 1...", "Tip 2..."]
}
"""


async def analyze_dish(*, image: PreparedImage, gemini_client: Any) -> Recipe:
    start = time.perf_counter()
    text = await gemini_client.generate(RECIPE_PROMPT, image)
    model_ms = int((time.perf_counter() - start) * 1000)

    try:
        recipe = extract(text)
    except MalformedResponse:
        log.warning("model returned no JSON", extra={"model_ms": model_ms, "raw_chars": len(text or "")})
        raise

    log.info(
        "recipe generated",
        extra={
            "model_ms": model_ms,
            "image_bytes": len(image.data),
            "dish": recipe.dishName,
            "ingredients": len(recipe.ingredients),
        },
    )
    return recipe
