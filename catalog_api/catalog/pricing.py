"""Variant price resolution."""

from decimal import Decimal


def effective_price(variant_price: Decimal | None, base_price: Decimal) -> Decimal:
    """Get the price charged for a variant.

    A zero (or missing) variant price means the variant has no override
    and inherits the product's base price. Comparison is exact.

    Args:
        variant_price: Price stored on the variant.
        base_price: Price of the owning product.

    Returns:
        Effective variant price.
    """
    if variant_price is None or variant_price == 0:
        return base_price
    return variant_price
