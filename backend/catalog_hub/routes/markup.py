"""
Markup routes — read and merge-update the markup override table.

Provides:
- GET  /markup  – current markup config
- POST /markup  – merge an update into the stored config
Version: 1.0.0
"""
import logging

from fastapi import APIRouter, Body, Depends

from catalog_hub.container import get_markup_store
from catalog_hub.db.markup_store import MarkupStore
from catalog_hub.schemas.markup import MarkupConfigResponse, MarkupUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/markup", tags=["markup"])


@router.get("", response_model=MarkupConfigResponse)
async def get_markup_config(store: MarkupStore = Depends(get_markup_store)):
    config = await store.get_markup_config()
    return MarkupConfigResponse(success=True, config=config)


@router.post("", response_model=MarkupConfigResponse)
async def update_markup_config(
    payload: MarkupUpdateRequest = Body(...),
    store: MarkupStore = Depends(get_markup_store),
):
    """Merge the given overrides into the stored config. Existing keys are never removed."""
    config = await store.update_markup_config(payload)
    return MarkupConfigResponse(success=True, message="Markup config updated", config=config)
