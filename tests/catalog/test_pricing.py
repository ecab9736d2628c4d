"""Tests for variant price resolution and product views."""

from decimal import Decimal

import pytest

from catalog_api.catalog.models import Category, Product, Variant
from catalog_api.catalog.pricing import effective_price
from catalog_api.catalog.views import ProductView


class TestEffectivePrice:
    """Tests for effective_price."""

    @pytest.mark.parametrize(
        ("base", "variant", "expected"),
        [
            ("100.00", "0.00", "100.00"),
            ("100.00", "75.50", "75.50"),
            ("50.00", "150.00", "150.00"),
            ("19.99", "0", "19.99"),
        ],
    )
    def test_effective_price(self, base: str, variant: str, expected: str) -> None:
        """Variant price wins unless it is zero."""
        assert effective_price(Decimal(variant), Decimal(base)) == Decimal(expected)

    def test_missing_variant_price_inherits_base(self) -> None:
        """A missing variant price behaves like zero."""
        assert effective_price(None, Decimal("12.00")) == Decimal("12.00")

    def test_tiny_override_is_not_treated_as_zero(self) -> None:
        """Zero comparison is exact, not approximate."""
        assert effective_price(Decimal("0.01"), Decimal("100.00")) == Decimal("0.01")


class TestProductView:
    """Tests for ProductView assembly."""

    @pytest.fixture
    def product(self) -> Product:
        """Create a transient product with variants."""
        return Product(
            id=7,
            code="PROD007",
            price=Decimal("100.00"),
            category=Category(id=1, code="CLOTHING", name="Clothing"),
            variants=[
                Variant(id=1, sku="SKU-A", name="Variant A", price=Decimal("89.99")),
                Variant(id=2, sku="SKU-B", name="Variant B", price=Decimal("0.00")),
            ],
        )

    def test_variants_carry_effective_price(self, product: Product) -> None:
        """Variant views expose the resolved price."""
        view = ProductView.from_model(product)
        assert [v.price for v in view.variants] == [Decimal("89.99"), Decimal("100.00")]

    def test_category_attached(self, product: Product) -> None:
        """The category is part of the view."""
        view = ProductView.from_model(product)
        assert view.category.code == "CLOTHING"
        assert view.category.name == "Clothing"

    def test_base_price_change_propagates(self, product: Product) -> None:
        """Effective prices are recomputed from the current base price."""
        product.price = Decimal("120.00")
        view = ProductView.from_model(product)
        assert view.variants[1].price == Decimal("120.00")
        assert product.variants[1].price == Decimal("0.00")

    def test_product_without_variants(self) -> None:
        """Products without variants get an empty tuple."""
        product = Product(
            id=1,
            code="PROD001",
            price=Decimal("10.00"),
            category=Category(id=1, code="SHOES", name="Shoes"),
            variants=[],
        )
        assert ProductView.from_model(product).variants == ()
