"""Read models returned by the catalog services.

Views are detached from the ORM session, so they can be used after the
session closes. Variant views carry the effective price, never the raw
stored override.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from catalog_api.catalog.models import Category, Product, Variant
from catalog_api.catalog.pricing import effective_price


@dataclass(frozen=True)
class CategoryView:
    """Category as exposed by the services."""

    id: int
    code: str
    name: str

    @classmethod
    def from_model(cls, category: Category) -> "CategoryView":
        return cls(id=category.id, code=category.code, name=category.name)


@dataclass(frozen=True)
class VariantView:
    """Variant with its effective price resolved."""

    id: int
    sku: str
    name: str
    price: Decimal

    @classmethod
    def from_model(cls, variant: Variant, base_price: Decimal) -> "VariantView":
        return cls(
            id=variant.id,
            sku=variant.sku,
            name=variant.name,
            price=effective_price(variant.price, base_price),
        )


@dataclass(frozen=True)
class ProductView:
    """Product with its category and variants attached.

    Attributes:
        id: Product identifier.
        code: Unique product code.
        price: Base price.
        category: Owning category.
        variants: Variants ordered by identifier.
    """

    id: int
    code: str
    price: Decimal
    category: CategoryView
    variants: tuple[VariantView, ...] = field(default_factory=tuple)

    @classmethod
    def from_model(cls, product: Product) -> "ProductView":
        """Build a view from a product loaded with category and variants.

        Effective variant prices are recomputed on every call, so a change
        to the base price shows up on the next read.
        """
        return cls(
            id=product.id,
            code=product.code,
            price=product.price,
            category=CategoryView.from_model(product.category),
            variants=tuple(VariantView.from_model(v, product.price) for v in product.variants),
        )
