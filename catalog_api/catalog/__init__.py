"""Product Catalog Service.

Provides paginated, filtered product and category queries, cached totals
and variant price resolution over the relational store.
"""

from catalog_api.catalog.models import Category, Product, Variant
from catalog_api.catalog.pagination import Pagination, parse_pagination
from catalog_api.catalog.pricing import effective_price
from catalog_api.catalog.repository import CategoryRepository, ProductRepository
from catalog_api.catalog.service import CatalogService, CategoryService, ProductFilter
from catalog_api.catalog.views import CategoryView, ProductView, VariantView

__all__ = [
    # Models
    "Category",
    "Product",
    "Variant",
    # Pagination
    "Pagination",
    "parse_pagination",
    # Pricing
    "effective_price",
    # Repositories
    "CategoryRepository",
    "ProductRepository",
    # Services
    "CatalogService",
    "CategoryService",
    "ProductFilter",
    # Views
    "CategoryView",
    "ProductView",
    "VariantView",
]
