"""
Route aggregator — mounts all routers under /api prefix.

Health routes are exported separately for main.py to mount at root.
Version: 1.0.0
"""
from fastapi import APIRouter

from catalog_hub.routes.catalog import router as catalog_router
from catalog_hub.routes.markup import router as markup_router
from catalog_hub.routes.sync import router as sync_router
from catalog_hub.routes.health import router as health_router

api_router = APIRouter(prefix="/api")

api_router.include_router(sync_router)
api_router.include_router(catalog_router)
api_router.include_router(markup_router)

__all__ = ["api_router", "health_router"]
