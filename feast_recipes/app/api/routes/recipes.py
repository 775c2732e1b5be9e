import logging
from typing import Optional

from fastapi import APIRouter, Header

from feast_recipes.app.schemas.recipe import ParseUrlRequest, ParseUrlResponse
from feast_recipes.app.services import recipe_import_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/parse-url", response_model=ParseUrlResponse)
async def parse_recipe_from_url_endpoint(
    payload: ParseUrlRequest,
    x_correlation_id: Optional[str] = Header(default=None),
):
    result = await recipe_import_service.import_recipe_from_url(payload.url, correlation_id=x_correlation_id)

    if not result.success or not result.recipe:
        return ParseUrlResponse(
            success=False,
            recipe=None,
            error_code=result.error_code or "parse_failed",
            message=result.error_message or "Unable to parse recipe from URL",
        )

    return ParseUrlResponse(
        success=True,
        recipe=recipe_import_service.parsed_to_input(result.recipe, result.source_url or payload.url),
    )
