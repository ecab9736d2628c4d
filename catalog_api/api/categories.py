"""Category API endpoints."""

from fastapi import APIRouter, Depends, status

from catalog_api.api.dependencies import get_category_service, get_pagination
from catalog_api.api.schemas import (
    CategorySchema,
    CreateCategoryRequest,
    CreateCategoryResponse,
    ErrorResponse,
    ListCategoriesResponse,
)
from catalog_api.catalog.pagination import Pagination
from catalog_api.catalog.service import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=ListCategoriesResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="List categories",
)
async def list_categories(
    pagination: Pagination = Depends(get_pagination),
    service: CategoryService = Depends(get_category_service),
) -> ListCategoriesResponse:
    """List categories ordered by ID with the total category count."""
    categories = await service.list_categories(pagination)
    total = await service.count()

    return ListCategoriesResponse(
        total=total,
        categories=[CategorySchema.from_view(c) for c in categories],
    )


@router.post(
    "",
    response_model=CreateCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create category",
)
async def create_category(
    request: CreateCategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> CreateCategoryResponse:
    """Create a category.

    Args:
        request: Category code and name.

    Returns:
        Created category with its ID.
    """
    category = await service.create(code=request.code, name=request.name)

    return CreateCategoryResponse(id=category.id, code=category.code, name=category.name)
