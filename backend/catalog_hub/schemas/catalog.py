"""
Catalog schemas — local catalog entries and their priced variants.
Version: 1.0.0
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class VariantPrice(BaseModel):
    amount: int
    currency_code: str


class VariantMetadata(BaseModel):
    remote_price_uuid: Optional[str] = None
    runsize: str
    colorspec: str
    cost: float
    markup_applied: float
    retail_price: float


class Variant(BaseModel):
    title: str
    sku: str
    prices: List[VariantPrice]
    metadata: VariantMetadata
    manage_inventory: bool = False


class ProvenanceMetadata(BaseModel):
    remote_product_uuid: str
    remote_product_code: str
    remote_category_id: Optional[str] = None
    last_synced: str
    markup_applied: float


class LocalCatalogEntry(BaseModel):
    id: Optional[str] = None
    handle: str
    title: Optional[str] = None
    status: str = "draft"
    variants: List[Variant] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
