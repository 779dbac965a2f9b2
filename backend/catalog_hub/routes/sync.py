"""
Sync routes — run a category sync inline or queue it on a worker.

Provides:
- POST /catalog/sync        – sync one category and return the report
- POST /catalog/sync/async  – queue the same sync as a Celery task
Version: 1.0.0
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from catalog_hub.container import get_sync_orchestrator
from catalog_hub.core.config import settings
from catalog_hub.schemas.sync import SyncQueuedResponse, SyncReport, SyncRequest
from catalog_hub.services.sync_orchestrator import SyncOrchestrator, run_category_sync

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["sync"])


@router.post("/sync", response_model=SyncReport)
async def sync_category(
    payload: Optional[SyncRequest] = Body(default=None),
    orchestrator: SyncOrchestrator = Depends(get_sync_orchestrator),
):
    """
    Sync one 4over category into the local catalog.

    Returns 200 with itemized errors when individual products fail; only a
    missing markup config or a failed product listing fails the request.
    """
    payload = payload or SyncRequest()
    return await run_category_sync(
        orchestrator,
        payload.category_id,
        settings.sync_default_category_id,
        update_existing=payload.update_existing,
        limit=payload.limit,
    )


@router.post("/sync/async", response_model=SyncQueuedResponse)
async def queue_category_sync(payload: Optional[SyncRequest] = Body(default=None)):
    """Queue a category sync for a Celery worker and return its task id."""
    # Import here to avoid circular imports
    from catalog_hub.celery_app.tasks.sync_catalog import sync_category_task

    payload = payload or SyncRequest()
    category_id = payload.category_id or settings.sync_default_category_id
    task = sync_category_task.delay(category_id, payload.update_existing, payload.limit)
    logger.info("queued category sync category=%s task_id=%s", category_id, task.id)
    return SyncQueuedResponse(status="queued", task_id=task.id, category_id=category_id)
