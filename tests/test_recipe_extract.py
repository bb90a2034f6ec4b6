from __future__ import annotations

import json

import pytest

from chefcam.models.recipe import RECIPE_DEFAULTS, Ingredient, Recipe
from chefcam.services.recipe_extract import MalformedResponse, extract, parse_model_json, to_recipe

FULL = {
    "dishName": "Shakshuka",
    "shortDescription": "Eggs poached in a spiced tomato and pepper sauce.",
    "cuisine": "Middle Eastern",
    "difficulty": "Easy",
    "servings": "4",
    "prepTime": "10 min",
    "cookTime": "25 min",
    "caloriesPerServing": "Approx. 320 kcal",
    "ingredients": [
        {"item": "Eggs", "amount": "6"},
        {"item": "Crushed tomatoes", "amount": "800 g"},
    ],
    "instructions": ["Soften the onion and peppers.", "Add tomatoes and spices.", "Crack in the eggs."],
    "platingTips": ["Serve in the pan with crusty bread."],
}


def _defaults_except(recipe: Recipe, *fields: str) -> None:
    for key, default in RECIPE_DEFAULTS.items():
        if key not in fields:
            assert getattr(recipe, key) == default, key
    for key in ("ingredients", "instructions", "platingTips"):
        if key not in fields:
            assert getattr(recipe, key) == [], key


def test_full_schema_is_returned_unchanged():
    recipe = extract(json.dumps(FULL))

    assert recipe.model_dump() == FULL


@pytest.mark.parametrize("fence", ["```json", "```", "```JSON", "```Json"])
def test_fenced_output_matches_unfenced(fence: str):
    plain = extract(json.dumps(FULL))
    fenced = extract(f"{fence}\n{json.dumps(FULL, indent=2)}\n```")

    assert fenced == plain


def test_prose_around_object_is_ignored():
    recipe = extract('Sure! Here you go:\n{"dishName":"Tacos"}\nEnjoy!')

    assert recipe.dishName == "Tacos"
    _defaults_except(recipe, "dishName")


def test_plain_prose_is_malformed():
    with pytest.raises(MalformedResponse):
        extract("I'm sorry, I can't identify this dish.")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        None,
        "} backwards {",
        '{"dishName": "Tacos",}',
        "```json\n```",
    ],
)
def test_unparseable_candidates_raise(raw):
    with pytest.raises(MalformedResponse):
        extract(raw)


def test_malformed_keeps_raw_text():
    with pytest.raises(MalformedResponse) as exc:
        extract("no json here")

    assert exc.value.raw == "no json here"
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize("value", [None, "easy", " Hard", "Medium ", "Extreme", 3, True, ["Easy"], {"level": "Easy"}])
def test_difficulty_outside_enum_becomes_medium(value):
    recipe = extract(json.dumps({"difficulty": value}))

    assert recipe.difficulty == "Medium"


def test_difficulty_absent_becomes_medium():
    assert extract("{}").difficulty == "Medium"


@pytest.mark.parametrize("value", ["Easy", "Medium", "Hard"])
def test_difficulty_enum_values_kept(value: str):
    assert extract(json.dumps({"difficulty": value})).difficulty == value


@pytest.mark.parametrize("value", ["eggs, flour", {"item": "Eggs"}, 4, None])
def test_ingredients_not_a_list_become_empty(value):
    recipe = extract(json.dumps({"dishName": "Cake", "ingredients": value}))

    assert recipe.ingredients == []
    assert recipe.dishName == "Cake"


def test_instructions_coerced_then_filtered():
    recipe = extract(json.dumps({"instructions": [1, "", "Step two", None]}))

    assert recipe.instructions == ["1", "Step two"]


def test_plating_tips_follow_instruction_rules():
    recipe = extract(json.dumps({"platingTips": [0, 2.5, "", "Garnish with parsley", None, False]}))

    assert recipe.platingTips == ["0", "2.5", "Garnish with parsley", "false"]


def test_instructions_string_is_dropped():
    recipe = extract(json.dumps({"instructions": "Mix everything and bake."}))

    assert recipe.instructions == []


def test_ingredient_defaults_and_non_objects_dropped():
    raw = '```json\n{"cuisine":"Mexican","ingredients":[{"item":"Corn","amount":"2 cups"},{"item":"Lime"}]}\n```'
    recipe = extract(raw)

    assert recipe.cuisine == "Mexican"
    assert recipe.ingredients == [
        Ingredient(item="Corn", amount="2 cups"),
        Ingredient(item="Lime", amount="To taste"),
    ]


def test_ingredient_entries_resolved_independently():
    recipe = extract(
        json.dumps(
            {
                "ingredients": [
                    "salt",
                    {"amount": "1 tbsp"},
                    {"item": "", "amount": None},
                    {"item": "Butter", "amount": 50},
                    ["Pepper", "pinch"],
                ]
            }
        )
    )

    assert [i.model_dump() for i in recipe.ingredients] == [
        {"item": "Ingredient", "amount": "1 tbsp"},
        {"item": "Ingredient", "amount": "To taste"},
        {"item": "Butter", "amount": "50"},
    ]


def test_bad_fields_do_not_affect_good_ones():
    recipe = extract(
        json.dumps(
            {
                "dishName": "Pad Thai",
                "cuisine": ["Thai"],
                "servings": 2,
                "prepTime": "",
                "cookTime": None,
                "caloriesPerServing": {"kcal": 600},
                "instructions": ["Soak noodles."],
            }
        )
    )

    assert recipe.dishName == "Pad Thai"
    assert recipe.cuisine == "Fusion"
    assert recipe.servings == "2"
    assert recipe.prepTime == "20 min"
    assert recipe.cookTime == "30 min"
    assert recipe.caloriesPerServing == "Approx. 450 kcal"
    assert recipe.instructions == ["Soak noodles."]


def test_blank_dish_name_uses_default():
    assert extract('{"dishName": "   "}').dishName == "Unknown Dish"


def test_top_level_array_gives_defaults():
    # braces slice the inner object out of the array text
    assert extract('[{"dishName": "Ramen"}]').dishName == "Ramen"
    assert to_recipe([{"dishName": "Ramen"}]) == Recipe()


def test_unknown_keys_ignored():
    recipe = extract('{"name": "Pizza", "calories": "800", "dishName": "Margherita"}')

    assert recipe.dishName == "Margherita"
    assert recipe.caloriesPerServing == "Approx. 450 kcal"


def test_parse_model_json_returns_plain_structure():
    assert parse_model_json('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_constants_are_malformed(constant: str):
    with pytest.raises(MalformedResponse):
        extract(f'{{"dishName": {constant}}}')


def test_constant_inside_list_is_malformed():
    with pytest.raises(MalformedResponse):
        extract('{"dishName": "Soup", "instructions": [Infinity]}')


def test_deep_nesting_is_malformed():
    with pytest.raises(MalformedResponse):
        extract('{"a": ' + "[" * 100000 + "]" * 100000 + "}")


def test_oversized_integer_is_malformed():
    with pytest.raises(MalformedResponse):
        extract('{"servings": ' + "9" * 5000 + "}")


def test_nested_instruction_entries_become_json_text():
    recipe = extract(json.dumps({"instructions": [{"step": "Boil"}, ["a", 1], "Serve"]}))

    assert recipe.instructions == ['{"step": "Boil"}', '["a", 1]', "Serve"]
