"""
Sync schemas — category sync request and report models.

Defines request/response models for the catalog sync endpoints.
Version: 1.0.0
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class SyncRequest(BaseModel):
    category_id: Optional[str] = None
    update_existing: bool = True
    limit: int = Field(default=0, ge=0)  # 0 = no limit


class SyncedProduct(BaseModel):
    """A product that was created or updated in the local catalog."""
    id: Optional[str] = None
    handle: str
    title: Optional[str] = None
    variants_count: int = 0
    markup: str


class SkippedProduct(BaseModel):
    handle: str
    product_code: str


class SyncError(BaseModel):
    product_code: str
    error: str


class SyncResults(BaseModel):
    created: List[SyncedProduct] = Field(default_factory=list)
    updated: List[SyncedProduct] = Field(default_factory=list)
    skipped: List[SkippedProduct] = Field(default_factory=list)
    errors: List[SyncError] = Field(default_factory=list)


class SyncSummary(BaseModel):
    total_remote: int
    processed: int
    created: int
    updated: int
    skipped: int
    errors: int


class SyncCategoryInfo(BaseModel):
    id: str
    name: str
    markup: Optional[float] = None


class SyncReport(BaseModel):
    """Outcome of one category sync. Item failures are data, not exceptions."""
    success: bool = True
    category: SyncCategoryInfo
    summary: SyncSummary
    results: SyncResults


class SyncQueuedResponse(BaseModel):
    status: str
    task_id: str
    category_id: str
