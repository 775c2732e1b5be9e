"""Recipe extractors."""

from feast_recipes.app.services.url_parsing.extractors.schema_org import (
    map_recipe_json,
    parse_recipe_from_html,
)

__all__ = [
    "map_recipe_json",
    "parse_recipe_from_html",
]
