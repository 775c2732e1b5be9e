"""URL recipe parsing package.

Fetches a recipe page, locates its schema.org JSON-LD ``Recipe`` and
normalizes it into a ``ParsedRecipe``.
"""

from feast_recipes.app.services.url_parsing.duration import parse_iso8601_duration
from feast_recipes.app.services.url_parsing.errors import (
    ConnectionFailedError,
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    InvalidContentTypeError,
    InvalidUrlError,
    InvalidUrlSchemeError,
    MalformedRecipeError,
    MultipleRecipesFoundError,
    NoJsonLdFoundError,
    NoRecipeFoundError,
    ParseError,
    ResponseReadError,
    ResponseTooLargeError,
    TooManyRedirectsError,
)
from feast_recipes.app.services.url_parsing.extractors import (
    map_recipe_json,
    parse_recipe_from_html,
)
from feast_recipes.app.services.url_parsing.html_fetcher import (
    fetch_url,
    is_html_content_type,
    status_to_message,
    validate_url,
)
from feast_recipes.app.services.url_parsing.ingredient_parser import (
    parse_ingredient_line,
    parse_quantity,
    parse_unit,
)
from feast_recipes.app.services.url_parsing.jsonld import (
    extract_jsonld_blocks,
    find_recipe_object,
)
from feast_recipes.app.services.url_parsing.models import (
    ParsedIngredient,
    ParsedRecipe,
)

__all__ = [
    # Models
    "ParsedIngredient",
    "ParsedRecipe",
    # Errors
    "FetchError",
    "InvalidUrlError",
    "InvalidUrlSchemeError",
    "ConnectionFailedError",
    "FetchTimeoutError",
    "TooManyRedirectsError",
    "HttpStatusError",
    "InvalidContentTypeError",
    "ResponseTooLargeError",
    "ResponseReadError",
    "ParseError",
    "NoJsonLdFoundError",
    "NoRecipeFoundError",
    "MultipleRecipesFoundError",
    "MalformedRecipeError",
    # HTML fetching
    "fetch_url",
    "is_html_content_type",
    "status_to_message",
    "validate_url",
    # Parsing
    "extract_jsonld_blocks",
    "find_recipe_object",
    "map_recipe_json",
    "parse_recipe_from_html",
    "parse_ingredient_line",
    "parse_quantity",
    "parse_unit",
    "parse_iso8601_duration",
]
