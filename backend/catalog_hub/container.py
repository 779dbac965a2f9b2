"""
Lazy DI container — singleton access to clients, stores, and services.

Works in both FastAPI (async) and Celery (sync) contexts.
Import individual getters to avoid circular imports.
Version: 1.0.0
"""

from functools import lru_cache

from catalog_hub.core.config import settings
from catalog_hub.clients.supabase_client import SupabaseClient
from catalog_hub.clients.fourover_client import FourOverClient
from catalog_hub.db.catalog_store import CatalogStore
from catalog_hub.db.markup_store import MarkupStore
from catalog_hub.services.catalog_reconciler import CatalogReconciler
from catalog_hub.services.category_service import CategoryService
from catalog_hub.services.sync_orchestrator import SyncOrchestrator


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_supabase_client():
    return SupabaseClient(settings)


@lru_cache(maxsize=1)
def get_fourover_client():
    return FourOverClient(settings)


# -- DB Stores -------------------------------------------------------------

@lru_cache(maxsize=1)
def get_catalog_store():
    return CatalogStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_markup_store():
    return MarkupStore(get_supabase_client())


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_catalog_reconciler():
    return CatalogReconciler(store=get_catalog_store())


@lru_cache(maxsize=1)
def get_category_service():
    return CategoryService(
        client=get_fourover_client(),
        page_delay=settings.sync_page_delay_seconds,
    )


@lru_cache(maxsize=1)
def get_sync_orchestrator():
    return SyncOrchestrator(
        client=get_fourover_client(),
        reconciler=get_catalog_reconciler(),
        markup_store=get_markup_store(),
        item_delay=settings.sync_item_delay_seconds,
    )
