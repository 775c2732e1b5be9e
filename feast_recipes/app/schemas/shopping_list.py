from typing import List, Optional

from pydantic import BaseModel, Field


class IngredientUsage(BaseModel):
    """One recipe ingredient drawn from a planned meal."""

    name: str
    quantity: float = 0.0
    unit: str = ""
    category: str = ""
    source_recipe_id: str
    servings_multiplier: float = 1.0
    # When both are given they override servings_multiplier (planned / recipe).
    planned_servings: Optional[float] = None
    recipe_servings: Optional[float] = None


class AggregatedShoppingItem(BaseModel):
    name: str
    quantity: float
    unit: str
    category: str
    source_recipe_ids: List[str] = Field(default_factory=list)
    is_converted: bool = False


class AggregateShoppingRequest(BaseModel):
    items: List[IngredientUsage] = Field(default_factory=list)


class AggregateShoppingResponse(BaseModel):
    items: List[AggregatedShoppingItem] = Field(default_factory=list)
