"""
Pricing constants — default markup, currency, variant cap.

Every pricing rule lives here. When markup defaults change, update ONE file.
Version: 1.0.0
"""

# Retail price = base_cost * (1 + markup), used when no markup config is stored
DEFAULT_MARKUP: float = 0.40

DEFAULT_CURRENCY: str = "usd"

# Upper bound on variants built from a product's price tiers
MAX_VARIANTS_PER_PRODUCT: int = 10

# Integer minor units per major currency unit (cents per dollar)
MINOR_UNITS_PER_MAJOR: int = 100
