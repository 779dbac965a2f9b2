"""
Markup schemas — the tiered markup override table and its update request.
Version: 1.0.0
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryMarkup(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    markup: float
    enabled: bool = True


class ProductMarkup(BaseModel):
    model_config = ConfigDict(frozen=True)

    # None keeps the entry on record but stops it from overriding
    markup: Optional[float] = None


class MarkupConfig(BaseModel):
    """
    Immutable markup snapshot.

    A sync run reads this once and passes it along explicitly, so edits
    saved while the run is in flight only apply to the next run.
    """
    model_config = ConfigDict(frozen=True)

    default_markup: Optional[float] = None
    category_markups: Dict[str, CategoryMarkup] = Field(default_factory=dict)
    product_markups: Dict[str, ProductMarkup] = Field(default_factory=dict)
    updated_at: Optional[str] = None


class MarkupUpdateRequest(BaseModel):
    default_markup: Optional[float] = None
    category_markups: Dict[str, CategoryMarkup] = Field(default_factory=dict)
    product_markups: Dict[str, ProductMarkup] = Field(default_factory=dict)


class MarkupConfigResponse(BaseModel):
    success: bool
    config: MarkupConfig
    message: Optional[str] = None
