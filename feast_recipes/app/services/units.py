"""Unit classification, conversion and quantity aggregation for shopping lists."""

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class UnitCategory(str, Enum):
    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"
    OTHER = "other"


# Canonical display spelling for every recognized variant.
_CANONICAL_UNITS: Dict[str, str] = {
    "c": "cup",
    "cup": "cup",
    "cups": "cup",
    "tbs": "tbsp",
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "l": "L",
    "liter": "L",
    "liters": "L",
    "fl oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "pt": "pint",
    "pint": "pint",
    "pints": "pint",
    "qt": "quart",
    "quart": "quart",
    "quarts": "quart",
    "gal": "gallon",
    "gallon": "gallon",
    "gallons": "gallon",
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "": "",
    "piece": "",
    "pieces": "",
    "whole": "whole",
    "clove": "clove",
    "cloves": "clove",
    "slice": "slice",
    "slices": "slice",
    "can": "can",
    "cans": "can",
    "bunch": "bunch",
    "bunches": "bunch",
    "head": "head",
    "heads": "head",
    "stalk": "stalk",
    "stalks": "stalk",
    "sprig": "sprig",
    "sprigs": "sprig",
    "pinch": "pinch",
    "pinches": "pinch",
    "dash": "dash",
    "dashes": "dash",
    "package": "package",
    "packages": "package",
    "pkg": "package",
}

# Millilitres per unit.
VOLUME_FACTORS: Dict[str, float] = {
    "ml": 1.0,
    "L": 1000.0,
    "tsp": 4.929,
    "tbsp": 14.787,
    "fl oz": 29.574,
    "cup": 236.588,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
}

# Grams per unit.
WEIGHT_FACTORS: Dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

COUNT_UNITS = frozenset({"", "whole", "clove", "slice", "can", "bunch", "head", "stalk", "sprig"})

_CONVERSION_FACTORS: Dict[UnitCategory, Dict[str, float]] = {
    UnitCategory.VOLUME: VOLUME_FACTORS,
    UnitCategory.WEIGHT: WEIGHT_FACTORS,
}


class AggregatedQuantity(BaseModel):
    quantity: float
    unit: str
    is_converted: bool = False


def normalize_unit(unit: str) -> str:
    """Map a unit spelling to its display form (``"Tablespoons"`` -> ``"tbsp"``)."""
    key = (unit or "").strip().lower()
    return _CANONICAL_UNITS.get(key, key)


def get_unit_category(unit: str) -> UnitCategory:
    key = (unit or "").strip().lower()
    if key not in _CANONICAL_UNITS:
        return UnitCategory.OTHER
    canonical = _CANONICAL_UNITS[key]
    if canonical in VOLUME_FACTORS:
        return UnitCategory.VOLUME
    if canonical in WEIGHT_FACTORS:
        return UnitCategory.WEIGHT
    if canonical in COUNT_UNITS:
        return UnitCategory.COUNT
    return UnitCategory.OTHER


def _conversion_factor(unit: str) -> Optional[float]:
    canonical = normalize_unit(unit)
    return VOLUME_FACTORS.get(canonical) or WEIGHT_FACTORS.get(canonical)


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert between units of one category; None when they are incompatible."""
    category = get_unit_category(from_unit)
    if category != get_unit_category(to_unit):
        return None

    if category in (UnitCategory.COUNT, UnitCategory.OTHER):
        return quantity if normalize_unit(from_unit) == normalize_unit(to_unit) else None

    from_factor = _conversion_factor(from_unit)
    to_factor = _conversion_factor(to_unit)
    if from_factor is None or to_factor is None:
        return None
    return quantity * from_factor / to_factor


def _majority_unit(group: Sequence[Tuple[float, str]]) -> str:
    # dicts keep insertion order, and max() keeps the first of equal counts
    counts: Dict[str, int] = {}
    for _, unit in group:
        normalized = normalize_unit(unit)
        counts[normalized] = counts.get(normalized, 0) + 1
    return max(counts, key=counts.__getitem__)


def _sum_by_unit(group: Sequence[Tuple[float, str]]) -> List[AggregatedQuantity]:
    totals: Dict[str, float] = {}
    for quantity, unit in group:
        normalized = normalize_unit(unit)
        totals[normalized] = totals.get(normalized, 0.0) + quantity
    return [AggregatedQuantity(quantity=qty, unit=unit, is_converted=False) for unit, qty in totals.items()]


def _sum_converted(group: Sequence[Tuple[float, str]], factors: Dict[str, float]) -> AggregatedQuantity:
    target = _majority_unit(group)
    target_factor = factors[target]
    total = 0.0
    converted = False
    for quantity, unit in group:
        normalized = normalize_unit(unit)
        factor = factors.get(normalized)
        if factor is None:
            logger.debug("No conversion factor for unit '%s', skipped", unit)
            continue
        total += quantity * factor / target_factor
        converted = converted or normalized != target
    return AggregatedQuantity(quantity=total, unit=target, is_converted=converted)


def aggregate_quantities(observations: Sequence[Tuple[float, str]]) -> List[AggregatedQuantity]:
    """Merge ``(quantity, unit)`` observations of one ingredient.

    Volume and weight observations are each converted into their most
    frequent unit (first seen wins ties) and summed into one entry. Count and
    other units are summed per spelling. Incompatible categories never merge,
    so the result may hold several entries; its order is not significant.
    """
    by_category: Dict[UnitCategory, List[Tuple[float, str]]] = {}
    for quantity, unit in observations:
        by_category.setdefault(get_unit_category(unit), []).append((quantity, unit))

    results: List[AggregatedQuantity] = []
    for category, group in by_category.items():
        factors = _CONVERSION_FACTORS.get(category)
        if factors is None:
            results.extend(_sum_by_unit(group))
        else:
            results.append(_sum_converted(group, factors))
    return results
