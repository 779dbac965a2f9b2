"""
4over schemas — typed views of remote catalog payloads.

Remote responses are validated here, at the client boundary, so the rest
of the pipeline never touches raw dicts. Unknown fields are ignored.
Version: 1.0.0
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RemoteCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_uuid: str
    category_name: str
    category_description: Optional[str] = None

    def to_summary(self) -> Dict[str, Any]:
        return {
            "id": self.category_uuid,
            "name": self.category_name,
            "description": self.category_description,
        }


class PriceTier(BaseModel):
    """One purchasable (run size, color spec, base cost) configuration."""
    model_config = ConfigDict(frozen=True)

    base_price_uuid: Optional[str] = None
    runsize: str
    colorspec: str
    product_baseprice: Decimal


class RemoteProduct(BaseModel):
    """Snapshot of a remote product for one sync run; never persisted as-is."""
    model_config = ConfigDict(frozen=True)

    product_uuid: str
    product_code: str
    product_description: Optional[str] = None
    category_id: Optional[str] = None
    price_tiers: List[PriceTier] = Field(default_factory=list)

    def with_pricing(self, category_id: str, tiers: List[PriceTier]) -> "RemoteProduct":
        return self.model_copy(update={"category_id": category_id, "price_tiers": list(tiers)})


class CatalogPage(BaseModel):
    """Parsed form of any 4over listing response."""
    entities: List[Dict[str, Any]] = Field(default_factory=list)
    total_results: int = 0
    maximum_pages: int = 0
    current_page: int = 0

    @classmethod
    def from_response(cls, data: Any, page: int = 0) -> "CatalogPage":
        # Some endpoints answer with a bare list instead of the envelope
        if isinstance(data, list):
            return cls(entities=data, total_results=len(data), maximum_pages=0, current_page=page)
        data = data or {}
        entities = data.get("entities") or []
        return cls(
            entities=entities,
            total_results=int(data.get("totalResults") or len(entities)),
            maximum_pages=int(data.get("maximumPages") or 0),
            current_page=int(data.get("currentPage") or page),
        )
