#!/usr/bin/env python
"""
Fetch a recipe page and print what the import flow extracts from it.

Run manually:
    python scripts/import_recipe.py https://example.com/some-recipe
    python scripts/import_recipe.py https://example.com/some-recipe --json
"""
import argparse
import asyncio
import logging
import sys

from feast_recipes.app.core.config import configure_logging
from feast_recipes.app.services import recipe_import_service

logger = logging.getLogger("import_recipe")


def _format_quantity(quantity: float) -> str:
    if not quantity:
        return ""
    return f"{quantity:g} "


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import a recipe from a URL")
    parser.add_argument("url", help="recipe page URL")
    parser.add_argument("--json", action="store_true", help="print the recipe record as JSON")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    result = asyncio.run(recipe_import_service.import_recipe_from_url(args.url))
    if not result.success or not result.recipe:
        logger.error("Import failed (%s)", result.error_code)
        print(result.error_message, file=sys.stderr)
        return 1

    if args.json:
        record = recipe_import_service.parsed_to_input(result.recipe, result.source_url or args.url)
        print(record.model_dump_json(indent=2))
        return 0

    recipe = result.recipe
    print(recipe.name)
    print(f"Serves {recipe.servings} | prep {recipe.prep_minutes}m | cook {recipe.cook_minutes}m | total {recipe.total_minutes}m")
    print()
    for ing in recipe.ingredients:
        unit = f"{ing.unit} " if ing.unit else ""
        print(f"- {_format_quantity(ing.quantity)}{unit}{ing.name}")
    print()
    for idx, step in enumerate(recipe.instructions, start=1):
        print(f"{idx}. {step}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
