"""
Markup resolver — picks the markup ratio for one product.

Precedence, most specific first:
1. product_markups[product_code]
2. category_markups[category_id], only while enabled
3. default_markup
Version: 1.0.0
"""
from typing import Any, Dict, Optional

from catalog_hub.core.constants.sync import UNKNOWN_CATEGORY_NAME
from catalog_hub.core.exceptions import ConfigurationError
from catalog_hub.schemas.markup import CategoryMarkup, MarkupConfig


def _active_category(config: MarkupConfig, category_id: Optional[str]) -> Optional[CategoryMarkup]:
    entry = config.category_markups.get(category_id) if category_id else None
    if entry is None or not entry.enabled:
        return None
    return entry


def resolve_markup(config: MarkupConfig, category_id: Optional[str], product_code: str) -> float:
    if config.default_markup is None:
        raise ConfigurationError("Markup config has no default_markup")

    product = config.product_markups.get(product_code)
    if product is not None and product.markup is not None:
        return product.markup

    category = _active_category(config, category_id)
    if category is not None:
        return category.markup

    return config.default_markup


def describe_category(config: MarkupConfig, category_id: str) -> Dict[str, Any]:
    """Category header for a sync report: id, display name, effective category markup."""
    entry = config.category_markups.get(category_id)
    active = _active_category(config, category_id)
    return {
        "id": category_id,
        "name": (entry.name if entry and entry.name else UNKNOWN_CATEGORY_NAME),
        "markup": active.markup if active else config.default_markup,
    }
