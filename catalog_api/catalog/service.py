"""Catalog services for product and category queries.

High-level services that combine repository operations with the
count cache and the variant pricing rule.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.pagination import Pagination
from catalog_api.catalog.repository import CategoryRepository, ProductRepository
from catalog_api.catalog.views import CategoryView, ProductView
from catalog_api.domain.exceptions import ConflictError, ValidationError
from catalog_api.infrastructure.cache import COUNT_CACHE_TTL, CountCache

PRODUCT_COUNT_KEY = "products__count"
CATEGORY_COUNT_KEY = "categories__count"


@dataclass(frozen=True)
class ProductFilter:
    """Filter parameters for product listing.

    ``None`` means the filter is not applied.

    Attributes:
        category: Exact (case-sensitive) category name.
        max_price: Inclusive upper bound on the product price.
    """

    category: str | None = None
    max_price: Decimal | None = None

    @classmethod
    def from_query(
        cls,
        category: str | None = None,
        max_price: Decimal | None = None,
    ) -> "ProductFilter":
        """Build a filter from request values, treating "" as no category."""
        return cls(category=category or None, max_price=max_price)


class CatalogService:
    """Service for product catalog queries.

    Example usage:
        async with context.session() as session:
            service = CatalogService(session, context.counts)

            products = await service.list_products(
                ProductFilter(category="Shoes"),
                Pagination(limit=20, offset=0),
            )
            total = await service.count()
    """

    def __init__(self, session: AsyncSession, counts: CountCache) -> None:
        """Initialize service with database session and count cache.

        Args:
            session: Async SQLAlchemy session.
            counts: Shared count cache.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.counts = counts

    async def list_products(
        self,
        filters: ProductFilter,
        pagination: Pagination,
    ) -> list[ProductView]:
        """List products matching filters within a pagination window.

        Args:
            filters: Filter parameters.
            pagination: Pagination window.

        Returns:
            Products ordered by ascending ID; empty past the last page.
        """
        products = await self.repository.find_all(
            category_name=filters.category,
            max_price=filters.max_price,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return [ProductView.from_model(p) for p in products]

    async def get_product(self, code: str) -> ProductView | None:
        """Get product by code.

        Args:
            code: Product code.

        Returns:
            Product view, or None if no product has this code.
        """
        product = await self.repository.get_by_code(code)
        if product is None:
            return None
        return ProductView.from_model(product)

    async def count(self) -> int:
        """Get the total number of products.

        The value ignores listing filters and may lag concurrent writes by
        up to one cache TTL.

        Returns:
            Unfiltered product count.
        """
        return await self.counts.get_or_compute(
            PRODUCT_COUNT_KEY,
            self.repository.count,
            COUNT_CACHE_TTL,
        )


class CategoryService:
    """Service for category creation and listing."""

    def __init__(self, session: AsyncSession, counts: CountCache) -> None:
        """Initialize service with database session and count cache.

        Args:
            session: Async SQLAlchemy session.
            counts: Shared count cache.
        """
        self.session = session
        self.repository = CategoryRepository(session)
        self.counts = counts

    async def create(self, code: str, name: str) -> CategoryView:
        """Create a category.

        Args:
            code: Unique category code.
            name: Category name.

        Returns:
            Created category with its generated ID.

        Raises:
            ValidationError: If code or name is blank.
            ConflictError: If a category with this code exists.
            StorageError: If the store fails.
        """
        code = code.strip()
        name = name.strip()
        if not code or not name:
            raise ValidationError(
                "invalid payload, missing required fields",
                details={"code": bool(code), "name": bool(name)},
            )

        if await self.repository.get_by_code(code) is not None:
            raise ConflictError("category already exists", details={"code": code})

        category = await self.repository.create(code=code, name=name)
        return CategoryView.from_model(category)

    async def list_categories(self, pagination: Pagination) -> list[CategoryView]:
        """List categories within a pagination window.

        Args:
            pagination: Pagination window.

        Returns:
            Categories ordered by ascending ID.
        """
        categories = await self.repository.find_all(
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return [CategoryView.from_model(c) for c in categories]

    async def count(self) -> int:
        """Get the total number of categories (cached)."""
        return await self.counts.get_or_compute(
            CATEGORY_COUNT_KEY,
            self.repository.count,
            COUNT_CACHE_TTL,
        )
