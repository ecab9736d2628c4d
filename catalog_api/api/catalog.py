"""Catalog API endpoints.

Provides endpoints for listing products and fetching product details.
"""

from fastapi import APIRouter, Depends, status

from catalog_api.api.dependencies import get_catalog_service, get_pagination, get_product_filter
from catalog_api.api.schemas import (
    ErrorResponse,
    ListCatalogResponse,
    ProductDetailsResponse,
    ProductSchema,
)
from catalog_api.catalog.pagination import Pagination
from catalog_api.catalog.service import CatalogService, ProductFilter
from catalog_api.domain.exceptions import NotFoundError

router = APIRouter(prefix="/catalog", tags=["Catalog"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ListCatalogResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="List products",
    description="List products ordered by ID, optionally filtered by category name and price ceiling.",
)
async def list_catalog(
    filters: ProductFilter = Depends(get_product_filter),
    pagination: Pagination = Depends(get_pagination),
    service: CatalogService = Depends(get_catalog_service),
) -> ListCatalogResponse:
    """List products.

    ``total`` is the size of the whole catalog, not the number of
    products matching the filters.

    Returns:
        Page of products with the catalog total.
    """
    products = await service.list_products(filters, pagination)
    total = await service.count()

    return ListCatalogResponse(
        total=total,
        products=[ProductSchema.from_view(p) for p in products],
    )


@router.get(
    "/{code}",
    response_model=ProductDetailsResponse,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get product details",
    description="Get a product by code, including its variants with effective prices.",
)
async def get_product_details(
    code: str,
    service: CatalogService = Depends(get_catalog_service),
) -> ProductDetailsResponse:
    """Get product details.

    Args:
        code: Product code.

    Returns:
        Product with category and variants.

    Raises:
        NotFoundError: If no product has this code.
    """
    product = await service.get_product(code)
    if product is None:
        raise NotFoundError("Product", code)

    return ProductDetailsResponse.from_view(product)
