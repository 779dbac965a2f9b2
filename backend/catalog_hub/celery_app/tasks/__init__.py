"""
Celery tasks package.
Exports all tasks for convenient imports.
Version: 1.0.0
"""
from catalog_hub.celery_app.tasks.sync_catalog import sync_category_task

__all__ = [
    "sync_category_task",
]
