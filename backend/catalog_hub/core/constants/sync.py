"""
Sync constants — remote endpoints, lifecycle status, pacing defaults.

Catalog sync constants.
Version: 1.0.0
"""

# 4over print-products endpoints
CATEGORIES_PATH: str = "/printproducts/categories"
CATEGORY_PRODUCTS_PATH: str = "/printproducts/categories/{category_id}/products"
PRODUCT_BASE_PRICES_PATH: str = "/printproducts/products/{product_uuid}/baseprices"
PRODUCT_OPTION_GROUPS_PATH: str = "/printproducts/products/{product_uuid}/optiongroups"
PRODUCT_QUOTE_PATH: str = "/services/productquote"

# New local entries start unpublished so they can be reviewed
DEFAULT_PRODUCT_STATUS: str = "draft"

# Seconds between remote calls when no settings override is given
ITEM_DELAY_SECONDS: float = 0.2
PAGE_DELAY_SECONDS: float = 0.1

UNKNOWN_CATEGORY_NAME: str = "Unknown"
