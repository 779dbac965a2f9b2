"""
Catalog sync tasks — run a category sync on a Celery worker.

Tasks:
- sync_category_task: sync one 4over category into the local catalog
Version: 1.0.0
"""
import logging
from typing import Any, Dict

from catalog_hub.celery_app.celery_config import celery_app
from catalog_hub.celery_app.tasks.base import (
    BaseTask,
    run_async,
    get_sync_orchestrator,
)
from catalog_hub.core.exceptions import (
    NonRetryableError,
    RemoteAPIError,
    RemoteRejectedError,
    RetryableError,
)

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    base=BaseTask,
    name="tasks.sync_catalog.sync_category",
    autoretry_for=(RetryableError,),
    dont_autoretry_for=(NonRetryableError,),
    retry_backoff=True,
    max_retries=3,
)
def sync_category_task(
    self, category_id: str, update_existing: bool = True, limit: int = 0
) -> Dict[str, Any]:
    """
    Sync one category and return the report as JSON.

    Only fatal errors (config read, product listing) reach Celery; a
    retry re-runs the whole category, which is safe because reconciliation
    is keyed by handle. Permanent 4over rejections are not retried.
    """
    logger.info(
        f"Syncing category {category_id} (update_existing={update_existing}, limit={limit})"
    )
    orchestrator = get_sync_orchestrator()
    try:
        report = run_async(
            orchestrator.sync_category(category_id, update_existing=update_existing, limit=limit)
        )
    except RemoteAPIError as e:
        if e.is_transient:
            raise
        logger.error(f"Category {category_id} rejected by 4over (status={e.status_code}): {e}")
        raise RemoteRejectedError(e) from e

    logger.info(
        f"Category {category_id} synced: created={report.summary.created} "
        f"updated={report.summary.updated} errors={report.summary.errors}"
    )
    return report.model_dump(mode="json")
