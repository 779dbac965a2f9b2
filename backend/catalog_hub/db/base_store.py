"""
Base store — shared Supabase client access for all stores.

All domain-specific stores inherit from this class to get
standardised insert / upsert / select / update primitives.
Version: 1.0.0
"""

import logging
from typing import Any, Dict, List

from fastapi import HTTPException
from postgrest.exceptions import APIError

from catalog_hub.core.config import settings
from catalog_hub.clients.supabase_client import SupabaseClient

logger = logging.getLogger("base_store")

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class BaseStore:
    """Base class for all Supabase stores providing shared CRUD operations."""

    def __init__(self, supabase_client: SupabaseClient | None = None) -> None:
        self._supabase_client = supabase_client or SupabaseClient(settings)

    @property
    def _client(self):
        """Get the Supabase client instance."""
        return self._supabase_client.client

    async def _insert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        """Insert rows into a table. Unique-key collisions surface as 409."""
        if not rows:
            return
        try:
            self._client.table(table).insert(rows).execute()
        except APIError as e:
            logger.info("supabase error table=%s detail=%s", table, str(e))
            status = 409 if getattr(e, "code", None) == UNIQUE_VIOLATION else 500
            raise HTTPException(
                status_code=status,
                detail=f"Supabase insert into {table} failed: {e}",
            )

    async def _upsert(
        self,
        table: str,
        rows: List[Dict[str, Any]],
        on_conflict: str,
        ignore_duplicates: bool = False,
    ) -> None:
        """
        Upsert rows keyed by the on_conflict column.

        Only the given rows are written; with ignore_duplicates an existing
        row is left as it is.
        """
        if not rows:
            return
        try:
            self._client.table(table).upsert(
                rows, on_conflict=on_conflict, ignore_duplicates=ignore_duplicates
            ).execute()
        except APIError as e:
            logger.info("supabase error table=%s detail=%s", table, str(e))
            raise HTTPException(
                status_code=500,
                detail=f"Supabase upsert into {table} failed: {e}",
            )

    async def _select(
        self, table: str, columns: str = "*", filters: Dict[str, Any] | None = None
    ) -> List[Dict[str, Any]]:
        """Select rows from a table with optional filters."""
        try:
            query = self._client.table(table).select(columns)
            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)
            response = query.execute()
            return response.data or []
        except APIError as e:
            logger.info("supabase error table=%s detail=%s", table, str(e))
            raise HTTPException(
                status_code=500,
                detail=f"Supabase select from {table} failed: {e}",
            )

    async def _update(
        self, table: str, filters: Dict[str, Any], payload: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Update rows in a table matching the filters; returns the updated rows."""
        try:
            query = self._client.table(table).update(payload)
            for key, value in filters.items():
                query = query.eq(key, value)
            response = query.execute()
            return response.data or []
        except APIError as e:
            logger.info("supabase error table=%s detail=%s", table, str(e))
            raise HTTPException(
                status_code=500,
                detail=f"Supabase update {table} failed: {e}",
            )
