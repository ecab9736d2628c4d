"""FastAPI dependencies.

Resolve the service context from application state and build per-request
sessions, services and validated query values.
"""

from collections.abc import AsyncGenerator
from decimal import Decimal, InvalidOperation

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.pagination import Pagination, parse_pagination
from catalog_api.catalog.service import CatalogService, CategoryService, ProductFilter
from catalog_api.domain.exceptions import ValidationError
from catalog_api.infrastructure.context import ServiceContext


def get_context(request: Request) -> ServiceContext:
    """Get the service context created by the application lifespan."""
    return request.app.state.context


async def get_session(
    context: ServiceContext = Depends(get_context),
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    async with context.session() as session:
        yield session


def get_catalog_service(
    session: AsyncSession = Depends(get_session),
    context: ServiceContext = Depends(get_context),
) -> CatalogService:
    return CatalogService(session, context.counts)


def get_category_service(
    session: AsyncSession = Depends(get_session),
    context: ServiceContext = Depends(get_context),
) -> CategoryService:
    return CategoryService(session, context.counts)


def get_pagination(
    limit: str | None = Query(default=None, description="Page size (1-100, default 10)"),
    offset: str | None = Query(default=None, description="Rows to skip (default 0)"),
) -> Pagination:
    """Parse pagination query parameters.

    Raises:
        ValidationError: If limit or offset is invalid.
    """
    return parse_pagination(limit, offset)


def get_product_filter(
    category: str | None = Query(default=None, description="Exact category name"),
    price_less_then: str | None = Query(
        default=None,
        alias="priceLessThen",
        description="Inclusive price ceiling",
    ),
) -> ProductFilter:
    """Parse product filter query parameters.

    Raises:
        ValidationError: If the price ceiling is not a finite decimal.
    """
    max_price = None
    if price_less_then:
        try:
            max_price = Decimal(price_less_then)
        except InvalidOperation as exc:
            raise ValidationError(
                "invalid priceLessThen parameter: must be a number",
                details={"field": "priceLessThen", "value": price_less_then},
            ) from exc
        if not max_price.is_finite():
            raise ValidationError(
                "invalid priceLessThen parameter: must be a number",
                details={"field": "priceLessThen", "value": price_less_then},
            )

    return ProductFilter.from_query(category=category, max_price=max_price)
