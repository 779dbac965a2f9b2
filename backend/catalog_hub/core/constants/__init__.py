"""
Constants package — re-exports from domain-specific modules.

Centralized business constants for Catalog Hub.

Usage:
    from catalog_hub.core.constants.pricing import DEFAULT_MARKUP
    # or import everything:
    from catalog_hub.core.constants import pricing, sync
Version: 1.0.0
"""

from catalog_hub.core.constants import pricing, sync
from catalog_hub.core.constants.pricing import (
    DEFAULT_MARKUP,
    DEFAULT_CURRENCY,
    MAX_VARIANTS_PER_PRODUCT,
    MINOR_UNITS_PER_MAJOR,
)
from catalog_hub.core.constants.sync import (
    CATEGORIES_PATH,
    CATEGORY_PRODUCTS_PATH,
    PRODUCT_BASE_PRICES_PATH,
    PRODUCT_OPTION_GROUPS_PATH,
    PRODUCT_QUOTE_PATH,
    DEFAULT_PRODUCT_STATUS,
    ITEM_DELAY_SECONDS,
    PAGE_DELAY_SECONDS,
    UNKNOWN_CATEGORY_NAME,
)

__all__ = [
    "pricing",
    "sync",
    "DEFAULT_MARKUP",
    "DEFAULT_CURRENCY",
    "MAX_VARIANTS_PER_PRODUCT",
    "MINOR_UNITS_PER_MAJOR",
    "CATEGORIES_PATH",
    "CATEGORY_PRODUCTS_PATH",
    "PRODUCT_BASE_PRICES_PATH",
    "PRODUCT_OPTION_GROUPS_PATH",
    "PRODUCT_QUOTE_PATH",
    "DEFAULT_PRODUCT_STATUS",
    "ITEM_DELAY_SECONDS",
    "PAGE_DELAY_SECONDS",
    "UNKNOWN_CATEGORY_NAME",
]
