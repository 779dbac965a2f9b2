"""
Catalog keys — deterministic handle and SKU derivation from product codes.

The handle is the local catalog's reconciliation key, so these functions
must stay stable: changing them orphans every previously synced entry.
Version: 1.0.0
"""
import re

_HANDLE_SEPARATORS = re.compile(r"[^a-z0-9]+")
_SKU_DISALLOWED = re.compile(r"[^a-zA-Z0-9-]")


def make_handle(product_code: str) -> str:
    """
    Lowercase the product code and collapse runs of non-alphanumerics to '-'.

    'BC-14PT 2x3.5' -> 'bc-14pt-2x3-5'
    """
    if not product_code:
        return ""
    return _HANDLE_SEPARATORS.sub("-", product_code.lower())


def make_sku(product_code: str, runsize: str, colorspec: str) -> str:
    """Join code, run size and color spec, dropping anything outside [A-Za-z0-9-]."""
    return _SKU_DISALLOWED.sub("", f"{product_code}-{runsize}-{colorspec}")
