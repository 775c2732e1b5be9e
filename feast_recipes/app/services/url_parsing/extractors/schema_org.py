"""Schema.org JSON-LD recipe extraction."""

import logging
from typing import List

from feast_recipes.app.services.url_parsing.duration import parse_iso8601_duration
from feast_recipes.app.services.url_parsing.errors import MalformedRecipeError
from feast_recipes.app.services.url_parsing.ingredient_parser import parse_ingredient_line
from feast_recipes.app.services.url_parsing.jsonld import extract_jsonld_blocks, find_recipe_object
from feast_recipes.app.services.url_parsing.models import ParsedIngredient, ParsedRecipe
from feast_recipes.app.services.url_parsing.parsing_utils import (
    decode_text,
    extract_author,
    extract_image,
    extract_instruction_text,
    first_text,
    parse_servings,
)

logger = logging.getLogger(__name__)


def _duration_minutes(value) -> int:
    return parse_iso8601_duration(value) if isinstance(value, str) else 0


def _extract_ingredients(raw_ingredients) -> List[ParsedIngredient]:
    if not isinstance(raw_ingredients, list):
        raise MalformedRecipeError("missing ingredients")

    ingredients: List[ParsedIngredient] = []
    for idx, raw in enumerate(raw_ingredients):
        if not isinstance(raw, str):
            logger.debug("Ingredient %d: unexpected type %s, dropped", idx, type(raw).__name__)
            continue
        if not raw.strip():
            logger.debug("Ingredient %d: blank, dropped", idx)
            continue
        ingredients.append(parse_ingredient_line(raw))

    if not ingredients:
        raise MalformedRecipeError("no valid ingredients")
    return ingredients


def map_recipe_json(obj: dict) -> ParsedRecipe:
    """Map a schema.org Recipe object onto a ``ParsedRecipe``.

    Raises ``MalformedRecipeError`` when the name, ingredients or instructions
    are missing or empty. Optional fields degrade to defaults.
    """
    if not isinstance(obj, dict):
        raise MalformedRecipeError("recipe is not an object")

    raw_name = obj.get("name")
    name = decode_text(raw_name) if isinstance(raw_name, str) else ""
    if not name:
        raise MalformedRecipeError("missing name")

    ingredients = _extract_ingredients(obj.get("recipeIngredient"))

    instructions = extract_instruction_text(obj.get("recipeInstructions"))
    if not instructions:
        raise MalformedRecipeError("missing instructions")

    description = obj.get("description")

    parsed = ParsedRecipe(
        name=name,
        description=decode_text(description) if isinstance(description, str) else "",
        prep_minutes=_duration_minutes(obj.get("prepTime")),
        cook_minutes=_duration_minutes(obj.get("cookTime")),
        total_minutes=_duration_minutes(obj.get("totalTime")),
        servings=parse_servings(obj.get("recipeYield")),
        image_url=extract_image(obj.get("image")),
        ingredients=ingredients,
        instructions=instructions,
        author=extract_author(obj.get("author")),
        category=first_text(obj.get("recipeCategory")),
        cuisine=first_text(obj.get("recipeCuisine")),
    )
    logger.info(
        "Mapped recipe '%s': ingredients=%d, steps=%d",
        parsed.name[:50],
        len(parsed.ingredients),
        len(parsed.instructions),
    )
    return parsed


def parse_recipe_from_html(html: str) -> ParsedRecipe:
    """Extract the page's single schema.org Recipe and map it.

    Raises a ``ParseError`` subclass when no usable recipe is present.
    """
    blocks = extract_jsonld_blocks(html)
    return map_recipe_json(find_recipe_object(blocks))
