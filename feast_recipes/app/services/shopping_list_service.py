import logging
from typing import Dict, List, Sequence

from feast_recipes.app.schemas.shopping_list import AggregatedShoppingItem, IngredientUsage
from feast_recipes.app.services.units import aggregate_quantities

logger = logging.getLogger(__name__)


def servings_multiplier(planned_servings: float, base_servings: float) -> float:
    """Scale factor for a planned meal: planned servings over the recipe's own."""
    if not base_servings or base_servings <= 0:
        return 1.0
    return planned_servings / base_servings


def _usage_multiplier(usage: IngredientUsage) -> float:
    if usage.planned_servings is not None and usage.recipe_servings is not None:
        return servings_multiplier(usage.planned_servings, usage.recipe_servings)
    return usage.servings_multiplier


class _IngredientGroup:
    def __init__(self, name: str, category: str):
        self.name = name
        self.category = category
        self.quantities: List[tuple[float, str]] = []
        self.recipe_ids: List[str] = []


def aggregate_shopping_items(usages: Sequence[IngredientUsage]) -> List[AggregatedShoppingItem]:
    """Combine planned-meal ingredient usages into shopping list lines.

    Usages are grouped by name, ignoring case. Each group yields one line per
    compatible unit category. Lines are sorted by category, then name.
    """
    groups: Dict[str, _IngredientGroup] = {}
    for usage in usages:
        name = usage.name.strip()
        key = name.lower()
        if not key:
            logger.debug("Skipping usage with blank name from recipe %s", usage.source_recipe_id)
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = _IngredientGroup(name, usage.category)
        group.quantities.append((usage.quantity * _usage_multiplier(usage), usage.unit))
        if usage.source_recipe_id not in group.recipe_ids:
            group.recipe_ids.append(usage.source_recipe_id)

    items: List[AggregatedShoppingItem] = []
    for group in groups.values():
        for aggregated in aggregate_quantities(group.quantities):
            items.append(
                AggregatedShoppingItem(
                    name=group.name,
                    quantity=aggregated.quantity,
                    unit=aggregated.unit,
                    category=group.category,
                    source_recipe_ids=list(group.recipe_ids),
                    is_converted=aggregated.is_converted,
                )
            )

    items.sort(key=lambda item: (item.category, item.name.lower()))
    logger.debug("Aggregated %d usages into %d shopping items", len(usages), len(items))
    return items
