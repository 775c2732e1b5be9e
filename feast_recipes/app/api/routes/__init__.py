from fastapi import APIRouter

from feast_recipes.app.api.routes import recipes, shopping_list

api_router = APIRouter()
api_router.include_router(recipes.router)
api_router.include_router(shopping_list.router)
