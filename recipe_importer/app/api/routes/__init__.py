from fastapi import APIRouter

from recipe_importer.app.api.routes import parse

api_router = APIRouter()
api_router.include_router(parse.router)
