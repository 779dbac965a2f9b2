"""
Base task class — common retry logic, async helpers, and lazy DI.

Provides:
- Automatic dependency injection (worker-local instances)
- Standardized error handling
- Logging configuration
- Retry logic
Version: 1.0.0
"""
import asyncio
import logging
from celery import Task

logger = logging.getLogger(__name__)


class BaseTask(Task):
    """Base task with common functionality for all workers."""

    # Don't create abstract tasks
    abstract = True

    # Default retry settings.
    # NOTE: Do NOT set autoretry_for here. Each task must explicitly declare
    # which exceptions trigger autoretry.
    retry_backoff = True
    retry_backoff_max = 300  # 5 minutes max backoff
    retry_jitter = True
    max_retries = 3

    # Track task state
    track_started = True

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        """Called when task fails after all retries exhausted."""
        logger.error(f"Task {self.name}[{task_id}] failed: {exc}")

    def on_retry(self, exc, task_id, args, kwargs, einfo):
        """Called when task is being retried."""
        logger.warning(f"Task {self.name}[{task_id}] retrying (attempt {self.request.retries}): {exc}")

    def on_success(self, retval, task_id, args, kwargs):
        """Called when task succeeds."""
        logger.info(f"Task {self.name}[{task_id}] succeeded")


# ============================================
# Async Helper
# ============================================
def run_async(coro):
    """
    Run async function in sync context.

    Each call creates a new event loop to avoid conflicts.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


# ============================================
# Dependency helpers (lazy loading, worker-local)
# ============================================
_dependencies = None


def get_dependencies():
    """
    Lazy load dependencies.

    Called after fork so each worker gets own instances.
    This prevents connection sharing issues between workers.
    """
    global _dependencies
    if _dependencies is None:
        # Lazy imports: circular dependency avoidance
        from catalog_hub.core.config import settings
        from catalog_hub.clients.fourover_client import FourOverClient
        from catalog_hub.clients.supabase_client import SupabaseClient
        from catalog_hub.db.catalog_store import CatalogStore
        from catalog_hub.db.markup_store import MarkupStore
        from catalog_hub.services.catalog_reconciler import CatalogReconciler
        from catalog_hub.services.sync_orchestrator import SyncOrchestrator

        supabase_client = SupabaseClient(settings)
        fourover_client = FourOverClient(settings)
        markup_store = MarkupStore(supabase_client)
        catalog_store = CatalogStore(supabase_client)

        _dependencies = {
            "settings": settings,
            "fourover_client": fourover_client,
            "markup_store": markup_store,
            "catalog_store": catalog_store,
            "sync_orchestrator": SyncOrchestrator(
                client=fourover_client,
                reconciler=CatalogReconciler(store=catalog_store),
                markup_store=markup_store,
                item_delay=settings.sync_item_delay_seconds,
            ),
        }
    return _dependencies


def get_sync_orchestrator():
    """Get sync orchestrator instance."""
    return get_dependencies()["sync_orchestrator"]


def get_settings():
    """Get settings instance."""
    return get_dependencies()["settings"]
