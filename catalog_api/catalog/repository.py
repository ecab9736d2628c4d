"""Repositories for catalog database operations.

Provide read access to products and categories with filtering, stable
ordering and pagination, plus category creation. Driver failures are
logged and re-raised as ``StorageError``.
"""

from collections.abc import Sequence
from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from catalog_api.catalog.models import Category, Product
from catalog_api.domain.exceptions import ConflictError, StorageError

logger = structlog.get_logger()


class ProductRepository:
    """Repository for Product database operations.

    Products are always returned with their category and variants loaded:
    the category through an inner join (every product has exactly one) and
    the variants through a single batched IN query.

    Example usage:
        async with context.session() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                category_name="Clothing",
                max_price=Decimal("100.00"),
                limit=20,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    def _base_query(self):
        return (
            select(Product)
            .join(Product.category)
            .options(
                contains_eager(Product.category),
                selectinload(Product.variants),
            )
        )

    async def get_by_code(self, code: str) -> Product | None:
        """Get product by code.

        Args:
            code: Product code.

        Returns:
            Product if found, None otherwise.

        Raises:
            StorageError: If the query fails.
        """
        query = self._base_query().where(Product.code == code)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Product lookup failed", code=code, exc_info=True)
            raise StorageError("error while getting product by code") from exc
        return result.scalar_one_or_none()

    async def find_all(
        self,
        category_name: str | None = None,
        max_price: Decimal | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products with filtering and pagination.

        Args:
            category_name: Exact category name to match.
            max_price: Inclusive upper bound on the base price.
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Matching products ordered by ascending ID.

        Raises:
            StorageError: If the query fails.
        """
        query = self._base_query()

        if category_name is not None:
            query = query.where(Category.name == category_name)

        if max_price is not None:
            query = query.where(Product.price <= max_price)

        query = query.order_by(Product.id.asc()).limit(limit).offset(offset)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            logger.error(
                "Product listing failed",
                category=category_name,
                max_price=str(max_price) if max_price is not None else None,
                exc_info=True,
            )
            raise StorageError("error while listing products") from exc
        return result.scalars().all()

    async def count(self) -> int:
        """Count all products.

        Returns:
            Total number of products.

        Raises:
            StorageError: If the query fails.
        """
        try:
            result = await self.session.execute(select(func.count()).select_from(Product))
        except SQLAlchemyError as exc:
            logger.error("Product count failed", exc_info=True)
            raise StorageError("error while counting products") from exc
        return result.scalar_one()


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def create(self, code: str, name: str) -> Category:
        """Insert a category and commit.

        Args:
            code: Unique category code.
            name: Category name.

        Returns:
            Persisted category with its generated ID.

        Raises:
            ConflictError: If the code violates the unique constraint.
            StorageError: If the insert fails for any other reason.
        """
        category = Category(code=code, name=name)
        self.session.add(category)

        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("Category insert hit unique constraint", code=code)
            raise ConflictError("category already exists", details={"code": code}) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Category insert failed", code=code, exc_info=True)
            raise StorageError("error while creating category") from exc

        logger.info("Category created", category_id=category.id, code=code)
        return category

    async def get_by_code(self, code: str) -> Category | None:
        """Get category by code.

        Args:
            code: Category code.

        Returns:
            Category if found, None otherwise.

        Raises:
            StorageError: If the query fails.
        """
        try:
            result = await self.session.execute(select(Category).where(Category.code == code))
        except SQLAlchemyError as exc:
            logger.error("Category lookup failed", code=code, exc_info=True)
            raise StorageError("error while getting category by code") from exc
        return result.scalar_one_or_none()

    async def find_all(self, limit: int = 10, offset: int = 0) -> Sequence[Category]:
        """List categories ordered by ascending ID.

        Args:
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Categories in the requested window.

        Raises:
            StorageError: If the query fails.
        """
        query = select(Category).order_by(Category.id.asc()).limit(limit).offset(offset)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Category listing failed", exc_info=True)
            raise StorageError("error while listing categories") from exc
        return result.scalars().all()

    async def count(self) -> int:
        """Count all categories.

        Returns:
            Total number of categories.

        Raises:
            StorageError: If the query fails.
        """
        try:
            result = await self.session.execute(select(func.count()).select_from(Category))
        except SQLAlchemyError as exc:
            logger.error("Category count failed", exc_info=True)
            raise StorageError("error while counting categories") from exc
        return result.scalar_one()
