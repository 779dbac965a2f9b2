"""
Markup store — default markup plus per-key override rows.

Tables:
- markup_config: one row (id = "default") holding default_markup
- markup_category_override: one row per category_id
- markup_product_override: one row per product_code

A write upserts only the keys it carries, so concurrent writers touching
different categories or products never overwrite each other. Nothing is
deleted by an update; overrides are switched off instead (enabled=False
for categories, markup=None for products).
Version: 1.0.0
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from catalog_hub.core.constants.pricing import DEFAULT_MARKUP
from catalog_hub.db.base_store import BaseStore
from catalog_hub.schemas.markup import CategoryMarkup, MarkupConfig, MarkupUpdateRequest, ProductMarkup

logger = logging.getLogger("markup_store")

SETTINGS_TABLE = "markup_config"
CATEGORY_TABLE = "markup_category_override"
PRODUCT_TABLE = "markup_product_override"
CONFIG_ID = "default"


def default_markup_config() -> MarkupConfig:
    return MarkupConfig(default_markup=DEFAULT_MARKUP)


def build_markup_config(
    settings_rows: List[Dict[str, Any]],
    category_rows: List[Dict[str, Any]],
    product_rows: List[Dict[str, Any]],
) -> MarkupConfig:
    """Assemble a config snapshot from the three tables."""
    if settings_rows:
        default_markup = settings_rows[0].get("default_markup")
        updated_at = settings_rows[0].get("updated_at")
    else:
        default_markup = DEFAULT_MARKUP
        updated_at = None

    return MarkupConfig(
        default_markup=default_markup,
        category_markups={
            row["category_id"]: CategoryMarkup(
                name=row.get("name"),
                markup=row["markup"],
                enabled=row.get("enabled", True),
            )
            for row in category_rows
        },
        product_markups={
            row["product_code"]: ProductMarkup(markup=row.get("markup"))
            for row in product_rows
        },
        updated_at=updated_at,
    )


class MarkupStore(BaseStore):
    """Read / per-key write access to the markup tables."""

    async def get_markup_config(self) -> MarkupConfig:
        settings_rows = await self._select(SETTINGS_TABLE, filters={"id": CONFIG_ID})
        category_rows = await self._select(CATEGORY_TABLE)
        product_rows = await self._select(PRODUCT_TABLE)
        return build_markup_config(settings_rows, category_rows, product_rows)

    async def update_markup_config(
        self, update: MarkupUpdateRequest, now: Optional[datetime] = None
    ) -> MarkupConfig:
        stamp = (now or datetime.now(timezone.utc)).isoformat()

        await self._write_settings(update.default_markup, stamp)
        await self._upsert(
            CATEGORY_TABLE,
            [
                {"category_id": key, **entry.model_dump(), "updated_at": stamp}
                for key, entry in update.category_markups.items()
            ],
            on_conflict="category_id",
        )
        await self._upsert(
            PRODUCT_TABLE,
            [
                {"product_code": key, "markup": entry.markup, "updated_at": stamp}
                for key, entry in update.product_markups.items()
            ],
            on_conflict="product_code",
        )

        logger.info(
            "markup config updated default=%s categories=%s products=%s",
            update.default_markup,
            list(update.category_markups),
            list(update.product_markups),
        )
        return await self.get_markup_config()

    async def _write_settings(self, default_markup: Optional[float], stamp: str) -> None:
        if default_markup is not None:
            await self._upsert(
                SETTINGS_TABLE,
                [{"id": CONFIG_ID, "default_markup": default_markup, "updated_at": stamp}],
                on_conflict="id",
            )
            return

        touched = await self._update(SETTINGS_TABLE, {"id": CONFIG_ID}, {"updated_at": stamp})
        if not touched:
            # First write ever: materialize the built-in default, never clobbering a racing writer
            await self._upsert(
                SETTINGS_TABLE,
                [{"id": CONFIG_ID, "default_markup": DEFAULT_MARKUP, "updated_at": stamp}],
                on_conflict="id",
                ignore_duplicates=True,
            )
