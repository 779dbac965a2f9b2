"""
Unit tests for CatalogReconciler — create / update / skip by handle.

Tests cover:
- New product creates one draft entry with priced variants
- Re-running the same product updates the same entry (idempotent)
- update_existing=False skips existing entries untouched
- Metadata written by other tools survives an update
- Variant cap and remote ordering
- Store failures wrapped as ReconciliationError
Version: 1.0.0
"""
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from postgrest.exceptions import APIError
from unittest.mock import AsyncMock

from catalog_hub.core.exceptions import ReconciliationError
from catalog_hub.schemas.catalog import LocalCatalogEntry
from catalog_hub.services.catalog_reconciler import (
    CREATED,
    SKIPPED,
    UPDATED,
    CatalogReconciler,
    build_variant,
    build_variants,
)

from conftest import BUSINESS_CARDS, make_product, make_tier

pytestmark = pytest.mark.unit

SYNCED_AT = datetime(2026, 5, 4, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def reconciler(catalog_store):
    return CatalogReconciler(store=catalog_store, clock=lambda: SYNCED_AT)


class TestBuildVariants:
    def test_variant_fields(self):
        variant = build_variant("BC-14PT", make_tier("250", "4/0", "12.345", uuid="bp-1"), 0.40)

        assert variant.title == "250 qty - 4/0"
        assert variant.sku == "BC-14PT-250-40"
        assert variant.prices[0].amount == 1728
        assert variant.prices[0].currency_code == "usd"
        assert variant.manage_inventory is False
        assert variant.metadata.remote_price_uuid == "bp-1"
        assert variant.metadata.cost == 12.345
        assert variant.metadata.markup_applied == 0.40
        assert variant.metadata.retail_price == pytest.approx(17.283)

    def test_cap_keeps_first_tiers_in_order(self):
        tiers = [make_tier(str(100 * n), "4/0", "10.00") for n in range(1, 15)]
        product = make_product("BC").with_pricing(BUSINESS_CARDS, tiers)

        variants = build_variants(product, 0.4)

        assert len(variants) == 10
        assert [v.metadata.runsize for v in variants] == [str(100 * n) for n in range(1, 11)]

    def test_no_tiers_no_variants(self):
        assert build_variants(make_product("BC"), 0.4) == []


class TestReconcileCreate:
    @pytest.mark.asyncio
    async def test_creates_draft_entry(self, reconciler, catalog_store, sample_remote_product):
        outcome = await reconciler.reconcile(sample_remote_product, 0.40)

        assert outcome.action == CREATED
        assert outcome.handle == "bc-14pt-gloss"
        entry = catalog_store.entries["bc-14pt-gloss"]
        assert entry.status == "draft"
        assert entry.title == "14PT Gloss Business Cards"
        assert len(entry.variants) == 3
        assert entry.metadata == {
            "remote_product_uuid": "f4b18ba9-835d-4425-aebd-3b76431db03c",
            "remote_product_code": "BC-14PT-GLOSS",
            "remote_category_id": BUSINESS_CARDS,
            "last_synced": SYNCED_AT.isoformat(),
            "markup_applied": 0.40,
        }

    @pytest.mark.asyncio
    async def test_empty_handle_rejected(self, reconciler, catalog_store):
        with pytest.raises(ReconciliationError):
            await reconciler.reconcile(make_product("", uuid="u1"), 0.4)
        assert catalog_store.entries == {}


class TestReconcileExisting:
    @pytest.mark.asyncio
    async def test_rerun_updates_same_entry(self, reconciler, catalog_store, sample_remote_product):
        first = await reconciler.reconcile(sample_remote_product, 0.40)
        second = await reconciler.reconcile(sample_remote_product, 0.50)

        assert first.action == CREATED
        assert second.action == UPDATED
        assert list(catalog_store.entries) == ["bc-14pt-gloss"]
        assert catalog_store.create_calls == 1
        assert second.entry.id == first.entry.id
        assert second.entry.metadata["markup_applied"] == 0.50
        assert second.entry.variants[0].prices[0].amount == 1852

    @pytest.mark.asyncio
    async def test_update_preserves_foreign_metadata_title_and_status(
        self, reconciler, catalog_store, sample_remote_product
    ):
        catalog_store.entries["bc-14pt-gloss"] = LocalCatalogEntry(
            id="prod_existing",
            handle="bc-14pt-gloss",
            title="Hand-written title",
            status="published",
            metadata={"seo_keywords": "cards", "markup_applied": 0.1},
        )

        outcome = await reconciler.reconcile(sample_remote_product, 0.40)

        entry = catalog_store.entries["bc-14pt-gloss"]
        assert outcome.action == UPDATED
        assert entry.title == "Hand-written title"
        assert entry.status == "published"
        assert entry.metadata["seo_keywords"] == "cards"
        assert entry.metadata["markup_applied"] == 0.40

    @pytest.mark.asyncio
    async def test_skip_when_update_disabled(self, reconciler, catalog_store, sample_remote_product):
        await reconciler.reconcile(sample_remote_product, 0.40)

        outcome = await reconciler.reconcile(sample_remote_product, 0.90, update_existing=False)

        assert outcome.action == SKIPPED
        assert catalog_store.update_calls == 0
        assert catalog_store.entries["bc-14pt-gloss"].metadata["markup_applied"] == 0.40

    @pytest.mark.asyncio
    async def test_codes_sharing_a_handle_converge(self, reconciler, catalog_store):
        await reconciler.reconcile(make_product("BC 14PT"), 0.4)
        outcome = await reconciler.reconcile(make_product("bc-14pt"), 0.4)

        assert outcome.action == UPDATED
        assert list(catalog_store.entries) == ["bc-14pt"]


class TestReconcileStoreFailures:
    @pytest.mark.asyncio
    async def test_http_exception_wrapped(self, reconciler, catalog_store, sample_remote_product):
        catalog_store.failing_handles.add("bc-14pt-gloss")

        with pytest.raises(ReconciliationError) as exc_info:
            await reconciler.reconcile(sample_remote_product, 0.40)

        assert exc_info.value.product_code == "BC-14PT-GLOSS"
        assert isinstance(exc_info.value.__cause__, HTTPException)

    @pytest.mark.asyncio
    async def test_entry_deleted_between_lookup_and_update(self, sample_remote_product):
        existing = LocalCatalogEntry(id="prod_1", handle="bc-14pt-gloss")
        store = AsyncMock()
        store.get_by_handle.return_value = existing
        store.update_entry.return_value = None
        reconciler = CatalogReconciler(store=store)

        with pytest.raises(ReconciliationError) as exc_info:
            await reconciler.reconcile(sample_remote_product, 0.40)

        assert exc_info.value.product_code == "BC-14PT-GLOSS"
        assert "bc-14pt-gloss" in str(exc_info.value)
        store.create_entry.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self, sample_remote_product):
        store = AsyncMock()
        store.get_by_handle.side_effect = APIError({"message": "timeout", "code": "57014"})
        reconciler = CatalogReconciler(store=store)

        with pytest.raises(ReconciliationError):
            await reconciler.reconcile(sample_remote_product, 0.40)
