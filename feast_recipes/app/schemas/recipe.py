from typing import List, Optional

from pydantic import BaseModel, Field


class IngredientInput(BaseModel):
    name: str
    quantity: float = 0.0
    unit: str = ""
    category: Optional[str] = None
    notes: Optional[str] = None


class RecipeInput(BaseModel):
    """Recipe record handed to the storage layer, which assigns id and timestamps."""

    name: str
    description: str = ""
    prep_time: int = 0
    cook_time: int = 0
    servings: int = 4
    image_path: Optional[str] = None
    source_url: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    ingredients: List[IngredientInput]
    instructions: List[str]


class ParseUrlRequest(BaseModel):
    url: str


class ParseUrlResponse(BaseModel):
    success: bool
    recipe: Optional[RecipeInput] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
