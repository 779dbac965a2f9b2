"""
Product schemas — category listing and price inspection responses.
Version: 1.0.0
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class CategorySummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class CategoryListResponse(BaseModel):
    success: bool = True
    total: int
    total_from_api: int
    categories: List[CategorySummary]


class ProductPricesResponse(BaseModel):
    success: bool = True
    product_id: str
    base_prices: List[Dict[str, Any]]
    option_groups: List[Dict[str, Any]]
