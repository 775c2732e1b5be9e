"""Import flow: fetch a recipe page, parse its JSON-LD, describe failures for people."""

import logging
import time
import uuid
from typing import Optional

from pydantic import BaseModel

from feast_recipes.app.schemas.recipe import IngredientInput, RecipeInput
from feast_recipes.app.services.url_parsing import errors
from feast_recipes.app.services.url_parsing.extractors import parse_recipe_from_html
from feast_recipes.app.services.url_parsing.html_fetcher import fetch_url
from feast_recipes.app.services.url_parsing.models import ParsedRecipe

logger = logging.getLogger(__name__)


class ImportResult(BaseModel):
    success: bool
    recipe: Optional[ParsedRecipe] = None
    source_url: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


def ensure_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Return ``correlation_id`` when it is non-blank, else a new short id."""
    if correlation_id and correlation_id.strip():
        return correlation_id.strip()
    return uuid.uuid4().hex[:8]


def fetch_error_message(exc: errors.FetchError) -> str:
    if isinstance(exc, (errors.InvalidUrlError, errors.InvalidUrlSchemeError)):
        return "Please enter a valid website URL"
    if isinstance(exc, (errors.ConnectionFailedError, errors.TooManyRedirectsError)):
        return "Could not connect to the website"
    if isinstance(exc, errors.FetchTimeoutError):
        return "The website took too long to respond"
    if isinstance(exc, errors.HttpStatusError):
        return f"The website returned an error (HTTP {exc.status})"
    if isinstance(exc, errors.InvalidContentTypeError):
        return "This URL does not appear to be a recipe page"
    if isinstance(exc, errors.ResponseTooLargeError):
        return "The page is too large to process"
    return "Could not read the website response"


def parse_error_message(exc: errors.ParseError) -> str:
    if isinstance(exc, errors.MultipleRecipesFoundError):
        return "This page contains multiple recipes. Please try a more specific URL"
    if isinstance(exc, errors.MalformedRecipeError):
        return f"The recipe data on this page could not be read: {exc.reason}"
    return "Could not find recipe data on this page"


def parsed_to_input(parsed: ParsedRecipe, source_url: str) -> RecipeInput:
    """Shape a parsed recipe as the record the storage layer persists."""
    return RecipeInput(
        name=parsed.name,
        description=parsed.description,
        prep_time=parsed.prep_minutes,
        cook_time=parsed.cook_minutes,
        servings=parsed.servings,
        image_path=parsed.image_url,
        source_url=source_url,
        ingredients=[
            IngredientInput(name=ing.name, quantity=ing.quantity, unit=ing.unit)
            for ing in parsed.ingredients
        ],
        instructions=list(parsed.instructions),
    )


async def import_recipe_from_url(url: str, correlation_id: Optional[str] = None) -> ImportResult:
    """Fetch ``url`` and parse its recipe. Failures come back as an unsuccessful result.

    Log lines carry ``correlation_id`` when the caller supplies a non-blank one,
    otherwise a fresh id. The URL itself is never logged, only its length.
    """
    cid = ensure_correlation_id(correlation_id)
    start = time.perf_counter()
    url = (url or "").strip()
    logger.debug("[cid:%s] import_recipe_from_url called, url_len=%d", cid, len(url))

    try:
        html = await fetch_url(url)
    except errors.FetchError as exc:
        message = fetch_error_message(exc)
        logger.warning("[cid:%s] fetch failed (%s): %s", cid, exc.error_code, type(exc).__name__)
        return ImportResult(success=False, source_url=url, error_code=exc.error_code, error_message=message)

    try:
        parsed = parse_recipe_from_html(html)
    except errors.ParseError as exc:
        message = parse_error_message(exc)
        logger.warning("[cid:%s] parse failed (%s): %s", cid, exc.error_code, exc)
        return ImportResult(success=False, source_url=url, error_code=exc.error_code, error_message=message)

    elapsed = time.perf_counter() - start
    logger.info(
        "[cid:%s] imported recipe in %.2fs (name_len=%d, %d ingredients, %d steps)",
        cid,
        elapsed,
        len(parsed.name),
        len(parsed.ingredients),
        len(parsed.instructions),
    )
    return ImportResult(success=True, recipe=parsed, source_url=url)
