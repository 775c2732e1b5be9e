"""Pydantic models for URL recipe parsing."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedIngredient(BaseModel):
    """One ingredient line split into quantity, unit and name."""

    quantity: float = 0.0
    unit: str = ""
    name: str

    model_config = ConfigDict(frozen=True)


class ParsedRecipe(BaseModel):
    """A recipe normalized from a schema.org Recipe object."""

    name: str
    description: str = ""
    prep_minutes: int = 0
    cook_minutes: int = 0
    total_minutes: int = 0
    servings: int = 4
    image_url: Optional[str] = None
    ingredients: List[ParsedIngredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    category: Optional[str] = None
    cuisine: Optional[str] = None

    model_config = ConfigDict(frozen=True)
