"""
Catalog store — local catalog entries keyed by handle.

catalog_product has a unique index on handle; that index is what keeps two
concurrent syncs from creating the same entry twice.
Version: 1.0.0
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from catalog_hub.db.base_store import BaseStore
from catalog_hub.schemas.catalog import LocalCatalogEntry, Variant

logger = logging.getLogger("catalog_store")

TABLE = "catalog_product"


def _to_entry(row: Dict[str, Any]) -> LocalCatalogEntry:
    return LocalCatalogEntry(
        id=row.get("id"),
        handle=row["handle"],
        title=row.get("title"),
        status=row.get("status") or "draft",
        variants=row.get("variants") or [],
        metadata=row.get("metadata") or {},
    )


class CatalogStore(BaseStore):
    """CRUD for the catalog_product table."""

    async def get_by_handle(self, handle: str) -> LocalCatalogEntry | None:
        rows = await self._select(TABLE, filters={"handle": handle})
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning("duplicate catalog rows handle=%s count=%s", handle, len(rows))
        return _to_entry(rows[0])

    async def create_entry(self, entry: LocalCatalogEntry) -> LocalCatalogEntry:
        now = datetime.now(timezone.utc).isoformat()
        created = entry.model_copy(update={"id": entry.id or str(uuid.uuid4())})
        row = created.model_dump(mode="json")
        row["created_at"] = now
        row["updated_at"] = now
        await self._insert(TABLE, [row])
        logger.info("catalog entry created handle=%s id=%s variants=%s", created.handle, created.id, len(created.variants))
        return created

    async def update_entry(
        self,
        handle: str,
        metadata: Dict[str, Any],
        variants: List[Variant] | None = None,
    ) -> LocalCatalogEntry | None:
        """Replace metadata (and variants, when given). Title and status are left alone."""
        payload: Dict[str, Any] = {
            "metadata": metadata,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if variants is not None:
            payload["variants"] = [v.model_dump(mode="json") for v in variants]

        rows = await self._update(TABLE, {"handle": handle}, payload)
        logger.info("catalog entry updated handle=%s rows=%s", handle, len(rows))
        return _to_entry(rows[0]) if rows else None
