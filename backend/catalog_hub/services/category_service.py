"""
Category service — full paginated category listing and product price lookups.

4over pages its category list and can repeat a category name on later
pages; the listing walks every page, keeps the first record per name and
sorts the survivors by name.
Version: 1.0.0
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List

from catalog_hub.clients.fourover_client import FourOverClient
from catalog_hub.core.constants.sync import PAGE_DELAY_SECONDS
from catalog_hub.schemas.fourover import RemoteCategory
from catalog_hub.utils.pacer import RequestPacer
from catalog_hub.utils.retry import SleepFn

logger = logging.getLogger("category_service")


def dedupe_by_name(categories: Iterable[RemoteCategory]) -> List[RemoteCategory]:
    """Keep the first category seen for each name, preserving order."""
    seen: set[str] = set()
    unique: List[RemoteCategory] = []
    for category in categories:
        if category.category_name in seen:
            continue
        seen.add(category.category_name)
        unique.append(category)
    return unique


def sort_by_name(categories: Iterable[RemoteCategory]) -> List[RemoteCategory]:
    return sorted(categories, key=lambda c: (c.category_name.casefold(), c.category_name))


class CategoryService:
    def __init__(
        self,
        client: FourOverClient,
        page_delay: float = PAGE_DELAY_SECONDS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._client = client
        self._page_delay = page_delay
        self._sleep = sleep

    async def fetch_all_categories(self) -> List[RemoteCategory]:
        """Walk pages 0..maximumPages as reported by the server, in order."""
        pacer = RequestPacer(self._page_delay, sleep=self._sleep)
        collected: List[RemoteCategory] = []
        current_page = 0
        max_pages = 0

        while current_page <= max_pages:
            await pacer.wait()
            categories, page = await self._client.list_categories_page(current_page)
            collected.extend(categories)
            max_pages = page.maximum_pages
            logger.info(
                "categories page=%s fetched=%s maximum_pages=%s",
                current_page, len(categories), max_pages,
            )
            current_page += 1

        return collected

    async def list_all_categories(self) -> Dict[str, Any]:
        collected = await self.fetch_all_categories()
        unique = sort_by_name(dedupe_by_name(collected))
        return {
            "total": len(unique),
            "total_from_api": len(collected),
            "categories": [c.to_summary() for c in unique],
        }

    async def get_product_prices(self, product_uuid: str) -> Dict[str, Any]:
        pacer = RequestPacer(self._page_delay, sleep=self._sleep)
        await pacer.wait()
        tiers = await self._client.get_base_prices(product_uuid)
        await pacer.wait()
        option_groups = await self._client.get_option_groups(product_uuid)
        return {
            "product_id": product_uuid,
            "base_prices": [t.model_dump(mode="json") for t in tiers],
            "option_groups": option_groups,
        }
