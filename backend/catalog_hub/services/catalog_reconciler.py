"""
Catalog reconciler — create-or-update of one remote product in the local catalog.

The handle derived from the product code is the only reconciliation key:
an entry found under it is updated (or skipped), otherwise a draft entry
is created. Running the same product twice converges on one entry.
Version: 1.0.0
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from fastapi import HTTPException
from postgrest.exceptions import APIError

from catalog_hub.core.constants.pricing import DEFAULT_CURRENCY, MAX_VARIANTS_PER_PRODUCT
from catalog_hub.core.constants.sync import DEFAULT_PRODUCT_STATUS
from catalog_hub.core.exceptions import ReconciliationError
from catalog_hub.db.catalog_store import CatalogStore
from catalog_hub.schemas.catalog import (
    LocalCatalogEntry,
    ProvenanceMetadata,
    Variant,
    VariantMetadata,
    VariantPrice,
)
from catalog_hub.schemas.fourover import PriceTier, RemoteProduct
from catalog_hub.utils.catalog_keys import make_handle, make_sku
from catalog_hub.utils.pricing import apply_markup

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
SKIPPED = "skipped"


@dataclass(frozen=True)
class ReconcileOutcome:
    action: str
    handle: str
    entry: Optional[LocalCatalogEntry] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_variant(product_code: str, tier: PriceTier, markup: float) -> Variant:
    amount, retail = apply_markup(tier.product_baseprice, markup)
    return Variant(
        title=f"{tier.runsize} qty - {tier.colorspec}",
        sku=make_sku(product_code, tier.runsize, tier.colorspec),
        prices=[VariantPrice(amount=amount, currency_code=DEFAULT_CURRENCY)],
        metadata=VariantMetadata(
            remote_price_uuid=tier.base_price_uuid,
            runsize=tier.runsize,
            colorspec=tier.colorspec,
            cost=float(tier.product_baseprice),
            markup_applied=markup,
            retail_price=float(retail),
        ),
        manage_inventory=False,
    )


def build_variants(
    product: RemoteProduct, markup: float, limit: int = MAX_VARIANTS_PER_PRODUCT
) -> List[Variant]:
    """Price the first ``limit`` tiers in remote order; the rest are dropped."""
    return [build_variant(product.product_code, tier, markup) for tier in product.price_tiers[:limit]]


def build_provenance(product: RemoteProduct, markup: float, synced_at: datetime) -> ProvenanceMetadata:
    return ProvenanceMetadata(
        remote_product_uuid=product.product_uuid,
        remote_product_code=product.product_code,
        remote_category_id=product.category_id,
        last_synced=synced_at.isoformat(),
        markup_applied=markup,
    )


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------

class CatalogReconciler:
    def __init__(
        self,
        store: CatalogStore,
        max_variants: int = MAX_VARIANTS_PER_PRODUCT,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._max_variants = max_variants
        self._clock = clock

    async def reconcile(
        self, product: RemoteProduct, markup: float, update_existing: bool = True
    ) -> ReconcileOutcome:
        """
        Apply the create / update / skip decision for one remote product.

        Raises ReconciliationError when the local store rejects a call; the
        caller decides whether that aborts anything beyond this product.
        """
        handle = make_handle(product.product_code)
        if not handle:
            raise ReconciliationError(product.product_code, "product code yields an empty handle")

        existing = await self._call_store(product, self._store.get_by_handle(handle))

        if existing is not None and not update_existing:
            logger.info("reconcile skip handle=%s (update_existing=False)", handle)
            return ReconcileOutcome(action=SKIPPED, handle=handle, entry=existing)

        variants = build_variants(product, markup, self._max_variants)
        provenance = build_provenance(product, markup, self._clock()).model_dump()

        if existing is not None:
            # Keep any metadata written by other tools, overwrite provenance keys
            metadata = {**existing.metadata, **provenance}
            updated = await self._call_store(
                product, self._store.update_entry(handle, metadata, variants)
            )
            if updated is None:
                raise ReconciliationError(
                    product.product_code, f"entry {handle} disappeared before it could be updated"
                )
            logger.info("reconcile update handle=%s variants=%s markup=%s", handle, len(variants), markup)
            return ReconcileOutcome(action=UPDATED, handle=handle, entry=updated)

        entry = LocalCatalogEntry(
            handle=handle,
            title=product.product_description,
            status=DEFAULT_PRODUCT_STATUS,
            variants=variants,
            metadata=provenance,
        )
        created = await self._call_store(product, self._store.create_entry(entry))
        logger.info("reconcile create handle=%s variants=%s markup=%s", handle, len(variants), markup)
        return ReconcileOutcome(action=CREATED, handle=handle, entry=created)

    async def _call_store(self, product: RemoteProduct, call):
        try:
            return await call
        except HTTPException as exc:
            raise ReconciliationError(product.product_code, str(exc.detail)) from exc
        except APIError as exc:
            raise ReconciliationError(product.product_code, str(exc)) from exc
