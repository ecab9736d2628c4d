#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and loads a small demo catalog of
categories, products and variants.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --drop
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///catalog.db
"""

import argparse
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.models import Category, Product, Variant
from catalog_api.infrastructure.config import Settings
from catalog_api.infrastructure.context import ServiceContext
from catalog_api.infrastructure.database import Base

# (code, name) -> [(product code, price, [(sku, name, price)])]
DEMO_CATALOG: dict[tuple[str, str], list[tuple[str, str, list[tuple[str, str, str]]]]] = {
    ("CLOTHING", "Clothing"): [
        ("PROD001", "10.99", [("SKU001A", "Variant A", "11.99"), ("SKU001B", "Variant B", "0")]),
        ("PROD004", "15.75", [("SKU004A", "Variant A", "0")]),
        ("PROD007", "40.25", []),
    ],
    ("SHOES", "Shoes"): [
        ("PROD002", "12.49", [("SKU002A", "Variant A", "0"), ("SKU002B", "Variant B", "14.49")]),
        ("PROD006", "35.00", []),
    ],
    ("ACCESSORIES", "Accessories"): [
        ("PROD003", "8.75", [("SKU003A", "Variant A", "9.25")]),
        ("PROD005", "20.00", []),
        ("PROD008", "150.00", [("SKU008A", "Variant A", "175.00")]),
    ],
}


async def create_tables(context: ServiceContext, drop: bool) -> None:
    """Create database tables, optionally dropping them first."""
    async with context.engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed(context: ServiceContext) -> dict[str, int]:
    """Insert the demo catalog.

    Returns:
        Counts of created rows.
    """
    result = {"categories": 0, "products": 0, "variants": 0}

    async with context.session() as session:
        for (category_code, category_name), products in DEMO_CATALOG.items():
            category = Category(code=category_code, name=category_name)
            session.add(category)
            result["categories"] += 1

            for product_code, price, variants in products:
                product = Product(code=product_code, price=Decimal(price), category=category)
                product.variants = [
                    Variant(sku=sku, name=name, price=Decimal(variant_price))
                    for sku, name, variant_price in variants
                ]
                session.add(product)
                result["products"] += 1
                result["variants"] += len(variants)

        await session.commit()

    return result


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo data",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (default: from environment)",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing catalog tables before seeding",
    )

    args = parser.parse_args()

    settings = Settings()
    if args.database_url:
        settings = Settings(database_url=args.database_url)

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Drop existing: {args.drop}")
    print()

    context = ServiceContext.create(settings)
    try:
        print("Creating database tables...")
        await create_tables(context, drop=args.drop)
        print("Tables ready.")
        print()

        result = await seed(context)
        print(f"  ✓ Categories: {result['categories']}")
        print(f"  ✓ Products: {result['products']}")
        print(f"  ✓ Variants: {result['variants']}")
        print()
    finally:
        await context.close()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
