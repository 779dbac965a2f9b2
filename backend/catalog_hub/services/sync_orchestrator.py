"""
Sync orchestrator — one category from 4over into the local catalog.

Pipeline per run:
1. read the markup config snapshot (once; fatal on failure)
2. list the category's remote products (fatal on failure)
3. for each product, sequentially: pace, fetch price tiers, resolve markup,
   reconcile (per-product failures are recorded, never raised)
4. aggregate the report
Version: 1.0.0
"""
import asyncio
import logging
from typing import Optional

from catalog_hub.clients.fourover_client import FourOverClient
from catalog_hub.core.constants.sync import ITEM_DELAY_SECONDS
from catalog_hub.core.exceptions import ConfigurationError
from catalog_hub.db.markup_store import MarkupStore
from catalog_hub.schemas.fourover import RemoteProduct
from catalog_hub.schemas.markup import MarkupConfig
from catalog_hub.schemas.sync import (
    SkippedProduct,
    SyncCategoryInfo,
    SyncedProduct,
    SyncError,
    SyncReport,
    SyncResults,
    SyncSummary,
)
from catalog_hub.services.catalog_reconciler import (
    CREATED,
    SKIPPED,
    CatalogReconciler,
    ReconcileOutcome,
)
from catalog_hub.services.markup_resolver import describe_category, resolve_markup
from catalog_hub.utils.pacer import RequestPacer
from catalog_hub.utils.pricing import format_markup_percent
from catalog_hub.utils.retry import SleepFn

logger = logging.getLogger("sync_orchestrator")


class SyncOrchestrator:
    def __init__(
        self,
        client: FourOverClient,
        reconciler: CatalogReconciler,
        markup_store: MarkupStore,
        item_delay: float = ITEM_DELAY_SECONDS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._client = client
        self._reconciler = reconciler
        self._markup_store = markup_store
        self._item_delay = item_delay
        self._sleep = sleep

    async def sync_category(
        self,
        category_id: str,
        update_existing: bool = True,
        limit: int = 0,
    ) -> SyncReport:
        """
        Sync every product of one 4over category (or the first ``limit``).

        Raises only when the config snapshot or the product listing cannot
        be obtained; everything after that is reported, not raised.
        """
        config = await self._markup_store.get_markup_config()
        if config.default_markup is None:
            raise ConfigurationError("Markup config has no default_markup")

        pacer = RequestPacer(self._item_delay, sleep=self._sleep)
        await pacer.wait()
        remote_products = await self._client.list_category_products(category_id)
        to_process = remote_products[:limit] if limit > 0 else remote_products

        logger.info(
            "sync start category=%s remote=%s processing=%s update_existing=%s",
            category_id, len(remote_products), len(to_process), update_existing,
        )

        results = SyncResults()
        for index, product in enumerate(to_process, start=1):
            try:
                outcome, markup = await self._sync_product(
                    product, category_id, config, update_existing, pacer
                )
            except Exception as exc:
                logger.error(
                    "sync item failed category=%s product_code=%s error=%s",
                    category_id, product.product_code, exc,
                )
                results.errors.append(SyncError(product_code=product.product_code, error=str(exc)))
                continue

            self._record(results, product, outcome, markup)
            logger.info(
                "[%s/%s] %s %s", index, len(to_process), outcome.action, outcome.handle
            )

        report = SyncReport(
            category=SyncCategoryInfo(**describe_category(config, category_id)),
            summary=SyncSummary(
                total_remote=len(remote_products),
                processed=len(to_process),
                created=len(results.created),
                updated=len(results.updated),
                skipped=len(results.skipped),
                errors=len(results.errors),
            ),
            results=results,
        )
        logger.info(
            "sync done category=%s created=%s updated=%s skipped=%s errors=%s",
            category_id,
            report.summary.created,
            report.summary.updated,
            report.summary.skipped,
            report.summary.errors,
        )
        return report

    async def _sync_product(
        self,
        product: RemoteProduct,
        category_id: str,
        config: MarkupConfig,
        update_existing: bool,
        pacer: RequestPacer,
    ) -> tuple[ReconcileOutcome, float]:
        # Fetched -> Priced
        await pacer.wait()
        tiers = await self._client.get_base_prices(product.product_uuid)
        priced = product.with_pricing(category_id, tiers)
        markup = resolve_markup(config, category_id, product.product_code)

        # Priced -> Created | Updated | Skipped
        outcome = await self._reconciler.reconcile(priced, markup, update_existing=update_existing)
        return outcome, markup

    @staticmethod
    def _record(
        results: SyncResults,
        product: RemoteProduct,
        outcome: ReconcileOutcome,
        markup: float,
    ) -> None:
        if outcome.action == SKIPPED:
            results.skipped.append(
                SkippedProduct(handle=outcome.handle, product_code=product.product_code)
            )
            return

        entry = outcome.entry
        synced = SyncedProduct(
            id=entry.id if entry else None,
            handle=outcome.handle,
            title=entry.title if entry else product.product_description,
            variants_count=len(entry.variants) if entry else 0,
            markup=format_markup_percent(markup),
        )
        if outcome.action == CREATED:
            results.created.append(synced)
        else:
            results.updated.append(synced)


async def run_category_sync(
    orchestrator: SyncOrchestrator,
    category_id: Optional[str],
    default_category_id: str,
    update_existing: bool = True,
    limit: int = 0,
) -> SyncReport:
    """Entry point shared by the HTTP route and the Celery task."""
    return await orchestrator.sync_category(
        category_id or default_category_id,
        update_existing=update_existing,
        limit=limit,
    )
