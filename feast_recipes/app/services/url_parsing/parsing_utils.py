"""General parsing utilities for recipe extraction."""

import html
import logging
import re
from typing import List, Optional
from urllib.parse import urlparse

from feast_recipes.app.services.url_parsing.constants import (
    DEFAULT_SERVINGS,
    HOW_TO_SECTION_TYPE,
    HOW_TO_STEP_TYPE,
)

logger = logging.getLogger(__name__)


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def decode_text(text: str) -> str:
    """Decode HTML entities (``&amp;``, ``&#39;``) and normalize whitespace."""
    return clean_text(html.unescape(text or ""))


def schema_types(obj) -> List[str]:
    """Return the ``@type`` of a JSON-LD object as a list of strings."""
    if not isinstance(obj, dict):
        return []
    value = obj.get("@type")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [t for t in value if isinstance(t, str)]
    return []


def is_absolute_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def extract_image(value) -> Optional[str]:
    """Extract the first absolute image URL from schema.org image formats.

    Accepts a URL string, an ``ImageObject`` with ``url``, or a list mixing
    both. Relative URLs are skipped rather than resolved.
    """
    candidates = value if isinstance(value, list) else [value]
    for candidate in candidates:
        # ImageObject.url may itself be an ImageObject
        while isinstance(candidate, dict):
            candidate = candidate.get("url")
        if isinstance(candidate, str):
            url = candidate.strip()
            if is_absolute_http_url(url):
                return url
    return None


def _step_text(step) -> Optional[str]:
    if isinstance(step, str):
        return decode_text(step) or None
    if isinstance(step, dict) and HOW_TO_STEP_TYPE in schema_types(step):
        text_val = step.get("text")
        if isinstance(text_val, str):
            return decode_text(text_val) or None
    return None


def _section_item_text(item) -> Optional[str]:
    # section items are steps whether or not they declare @type
    if isinstance(item, dict):
        text_val = item.get("text")
        if not isinstance(text_val, str):
            return None
        return decode_text(text_val) or None
    return _step_text(item)


def extract_instruction_text(instructions) -> List[str]:
    """Flatten schema.org ``recipeInstructions`` into ordered step strings."""
    steps: List[str] = []
    if isinstance(instructions, str):
        cleaned = decode_text(instructions)
        if cleaned:
            steps.append(cleaned)
        return steps
    if not isinstance(instructions, list):
        return steps

    for entry in instructions:
        if isinstance(entry, dict) and HOW_TO_SECTION_TYPE in schema_types(entry):
            items = entry.get("itemListElement")
            if not isinstance(items, list):
                logger.debug("HowToSection without itemListElement list, skipping")
                continue
            for item in items:
                text = _section_item_text(item)
                if text:
                    steps.append(text)
            continue
        text = _step_text(entry)
        if text:
            steps.append(text)
        elif isinstance(entry, dict):
            logger.debug("Skipping instruction entry of type %s", schema_types(entry) or "unknown")
    return steps


def extract_author(value) -> Optional[str]:
    """Extract an author name from a string, a Person/Organization, or a list of those."""
    candidates = value if isinstance(value, list) else [value]
    for candidate in candidates:
        while isinstance(candidate, dict):
            candidate = candidate.get("name")
        if isinstance(candidate, str):
            name = decode_text(candidate)
            if name:
                return name
    return None


def first_text(value) -> Optional[str]:
    """Return a string value, or the first element of a list when it is a string."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, str):
        return decode_text(value) or None
    return None


def _first_integer(text: str) -> Optional[int]:
    # The first digit run: "4 servings" -> 4, "3-4" -> 3, "Makes 12" -> 12.
    match = re.search(r"\d+", text)
    return int(match.group()) if match else None


def parse_servings(value) -> int:
    """Parse ``recipeYield`` into a serving count, defaulting to 4.

    Ranges such as ``"3-4"`` resolve to their lower bound.
    """
    if isinstance(value, list):
        value = value[0] if value else None

    servings: Optional[int] = None
    if isinstance(value, bool):
        servings = None
    elif isinstance(value, int):
        servings = value
    elif isinstance(value, float) and value.is_integer():
        servings = int(value)
    elif isinstance(value, str):
        servings = _first_integer(value)

    if servings is None or servings <= 0:
        return DEFAULT_SERVINGS
    return servings
