"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
Prices leave the service as Decimal and are rendered as JSON numbers here.
"""

from pydantic import BaseModel, ConfigDict, Field

from catalog_api.catalog.views import CategoryView, ProductView, VariantView


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[dict] = Field(default_factory=list, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


# ============================================================================
# Category Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """Category code and name."""

    code: str
    name: str

    @classmethod
    def from_view(cls, view: CategoryView) -> "CategorySchema":
        return cls(code=view.code, name=view.name)


class CreateCategoryRequest(BaseModel):
    """Request to create a category.

    Surrounding whitespace is stripped before length checks. Blank fields
    are rejected by the service, not by the schema, so that missing and
    whitespace-only values produce the same error.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    code: str = Field(default="", max_length=50, description="Unique category code")
    name: str = Field(default="", max_length=255, description="Category name")


class CreateCategoryResponse(CategorySchema):
    """Created category with its generated ID."""

    id: int


class ListCategoriesResponse(BaseModel):
    """Page of categories with the total category count."""

    total: int
    categories: list[CategorySchema]


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product summary used in listings."""

    code: str
    price: float
    category: CategorySchema

    @classmethod
    def from_view(cls, view: ProductView) -> "ProductSchema":
        return cls(
            code=view.code,
            price=float(view.price),
            category=CategorySchema.from_view(view.category),
        )


class VariantSchema(BaseModel):
    """Variant with its effective price."""

    id: int
    sku: str
    name: str
    price: float

    @classmethod
    def from_view(cls, view: VariantView) -> "VariantSchema":
        return cls(id=view.id, sku=view.sku, name=view.name, price=float(view.price))


class ListCatalogResponse(BaseModel):
    """Page of products with the total (unfiltered) product count."""

    total: int = Field(..., description="Total number of products in the catalog")
    products: list[ProductSchema]


class ProductDetailsResponse(ProductSchema):
    """Product with its variants."""

    id: int
    variants: list[VariantSchema]

    @classmethod
    def from_view(cls, view: ProductView) -> "ProductDetailsResponse":
        return cls(
            id=view.id,
            code=view.code,
            price=float(view.price),
            category=CategorySchema.from_view(view.category),
            variants=[VariantSchema.from_view(v) for v in view.variants],
        )
