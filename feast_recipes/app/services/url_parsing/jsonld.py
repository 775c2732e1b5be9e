"""Schema.org JSON-LD discovery in HTML documents."""

import json
import logging
from typing import Any, List

from bs4 import BeautifulSoup

from feast_recipes.app.services.url_parsing.constants import RECIPE_TYPE
from feast_recipes.app.services.url_parsing.errors import (
    MultipleRecipesFoundError,
    NoJsonLdFoundError,
    NoRecipeFoundError,
)
from feast_recipes.app.services.url_parsing.parsing_utils import schema_types

logger = logging.getLogger(__name__)


def _is_jsonld_type(value) -> bool:
    if not value:
        return False
    return value.split(";")[0].strip().lower() == "application/ld+json"


def extract_jsonld_blocks(html: str) -> List[Any]:
    """Return every ``application/ld+json`` script body that parses as JSON.

    Blocks that fail to parse are skipped; raises ``NoJsonLdFoundError`` when
    none survive.
    """
    soup = BeautifulSoup(html or "", "lxml")
    scripts = soup.find_all("script", attrs={"type": _is_jsonld_type})
    logger.debug("Found %d JSON-LD script blocks", len(scripts))

    blocks: List[Any] = []
    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            blocks.append(json.loads(raw_json))
        except (ValueError, RecursionError) as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )

    if not blocks:
        raise NoJsonLdFoundError()
    return blocks


def is_recipe(value) -> bool:
    return RECIPE_TYPE in schema_types(value)


def collect_recipes(value, matches: List[dict]) -> None:
    """Depth-first walk appending every Recipe object found under ``value`` to ``matches``.

    Uses an explicit stack so arbitrarily nested data cannot exhaust the call stack.
    """
    stack = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if is_recipe(current):
                matches.append(current)
                continue
            graph = current.get("@graph")
            if isinstance(graph, list):
                stack.extend(reversed(graph))
        elif isinstance(current, list):
            stack.extend(reversed(current))


def find_recipe_object(blocks: List[Any]) -> dict:
    """Locate the single Recipe object across all JSON-LD blocks."""
    matches: List[dict] = []
    for block in blocks:
        collect_recipes(block, matches)

    logger.debug("Found %d Recipe objects across %d JSON-LD blocks", len(matches), len(blocks))
    if not matches:
        raise NoRecipeFoundError()
    if len(matches) > 1:
        raise MultipleRecipesFoundError(len(matches))
    return matches[0]
