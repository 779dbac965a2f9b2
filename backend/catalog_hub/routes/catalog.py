"""
Catalog routes — browse the remote 4over catalog.

Provides:
- GET /catalog/categories                  – all categories, deduplicated and sorted
- GET /catalog/products/{product_id}/prices – base prices and option groups
Version: 1.0.0
"""
from fastapi import APIRouter, Depends

from catalog_hub.container import get_category_service
from catalog_hub.schemas.products import CategoryListResponse, ProductPricesResponse
from catalog_hub.services.category_service import CategoryService

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(service: CategoryService = Depends(get_category_service)):
    result = await service.list_all_categories()
    return CategoryListResponse(success=True, **result)


@router.get("/products/{product_id}/prices", response_model=ProductPricesResponse)
async def get_product_prices(
    product_id: str,
    service: CategoryService = Depends(get_category_service),
):
    result = await service.get_product_prices(product_id)
    return ProductPricesResponse(success=True, **result)
