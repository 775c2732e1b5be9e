"""Ingredient line parsing: "1 1/2 cups sugar" -> quantity, unit, name."""

import html
import logging
import re
from typing import Tuple

from feast_recipes.app.services.url_parsing.constants import (
    FRACTION_CHARS,
    FRACTION_MAP,
    INGREDIENT_UNITS,
    QUANTITY_CHARS,
)
from feast_recipes.app.services.url_parsing.models import ParsedIngredient

logger = logging.getLogger(__name__)


def normalize_fractions(text: str) -> str:
    """Spell out unicode vulgar fractions: ``"1½ cups"`` -> ``"1 1/2 cups"``."""
    text = re.sub(rf"(\d)([{FRACTION_CHARS}])", r"\1 \2", text)
    for char, spelled in FRACTION_MAP.items():
        text = text.replace(char, spelled)
    return text


def _to_float(value: str, default: float = 0.0) -> float:
    try:
        return float(value)
    except ValueError:
        return default


def parse_fraction(value: str) -> float:
    """Parse ``"1/2"`` into 0.5; a zero denominator or a malformed fraction gives 0.0."""
    parts = value.split("/")
    if len(parts) != 2:
        return 0.0
    numerator = _to_float(parts[0].strip())
    denominator = _to_float(parts[1].strip(), default=1.0)
    if denominator == 0:
        return 0.0
    return numerator / denominator


def parse_number(value: str) -> float:
    """Parse a captured quantity run: integer, decimal, fraction, mixed number or range.

    Ranges keep their lower bound, so ``"3-4"`` is 3.0.
    """
    value = value.strip()

    dash_idx = value.find("-")
    if dash_idx > 0:
        return parse_number(value[:dash_idx])

    parts = value.split()
    if len(parts) == 2:
        return _to_float(parts[0]) + parse_fraction(parts[1])

    if "/" in value:
        return parse_fraction(value)

    return _to_float(value)


def parse_quantity(text: str) -> Tuple[float, str]:
    """Split the leading quantity off ``text``.

    Returns ``(quantity, rest)``; when no digit leads the text the quantity is
    0.0 and ``rest`` is the input unchanged.
    """
    idx = 0
    length = len(text)
    while idx < length and text[idx].isspace():
        idx += 1

    start = idx
    has_digit = False
    while idx < length:
        char = text[idx]
        if char in QUANTITY_CHARS:
            has_digit = has_digit or char.isdigit()
            idx += 1
        elif (
            char == " "
            and idx > start
            and idx + 1 < length
            and text[idx + 1] in "0123456789"
        ):
            # "1 1/2": a single space is part of the quantity only when a digit follows
            idx += 1
        else:
            break

    if not has_digit:
        return 0.0, text

    return parse_number(text[start:idx]), text[idx:]


def _is_unit_boundary(text: str, end: int) -> bool:
    return end == len(text) or text[end].isspace() or text[end] == ","


def parse_unit(text: str) -> Tuple[str, str]:
    """Split a leading unit off ``text``, returning ``(unit, rest)``.

    The unit keeps the caller's spelling. A leading parenthetical such as
    ``"(15 oz) can beans"`` is dropped and matching retried after it.
    """
    text = text.strip()
    while True:
        lowered = text.lower()
        for unit in INGREDIENT_UNITS:
            if lowered.startswith(unit) and _is_unit_boundary(text, len(unit)):
                return text[: len(unit)], text[len(unit) :]

        close_idx = text.find(")") if text.startswith("(") else -1
        if close_idx == -1:
            return "", text
        text = text[close_idx + 1 :].strip()


def parse_ingredient_line(line: str) -> ParsedIngredient:
    """Parse a free-text ingredient line into quantity, unit and name.

    Never raises: an unreadable quantity becomes 0.0 and an unknown unit
    stays part of the name.
    """
    raw = normalize_fractions(html.unescape(line or "")).strip()

    quantity, rest = parse_quantity(raw)
    unit, name = parse_unit(rest)
    name = name.strip()

    if not name:
        # "1 large" or a bare "4": keep something meaningful as the name
        name, unit = (unit, "") if unit else (raw, "")

    logger.debug("Ingredient '%s' -> qty=%s unit='%s' name='%s'", raw[:50], quantity, unit, name[:30])
    return ParsedIngredient(quantity=quantity, unit=unit, name=name)
