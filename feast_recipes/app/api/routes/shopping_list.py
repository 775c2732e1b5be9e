from fastapi import APIRouter

from feast_recipes.app.schemas.shopping_list import AggregateShoppingRequest, AggregateShoppingResponse
from feast_recipes.app.services import shopping_list_service

router = APIRouter(prefix="/shopping-list", tags=["shopping_list"])


@router.post("/aggregate", response_model=AggregateShoppingResponse)
def aggregate_shopping_list(payload: AggregateShoppingRequest):
    items = shopping_list_service.aggregate_shopping_items(payload.items)
    return AggregateShoppingResponse(items=items)
