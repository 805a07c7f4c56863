from datetime import datetime

from pydantic import FiniteFloat
from pydantic.alias_generators import to_camel

from catalog.models import Product
from catalog.schemas.base import CamelModel


class ProductCreate(CamelModel):
    # All optional so that a missing field is reported as 400, not a 422 schema error
    product_name: str | None = None
    old_price: FiniteFloat | None = None
    offer_price: FiniteFloat | None = None
    categories: str | None = None
    product_category_id: int | None = None
    product_image: str | None = None

    def missing_fields(self) -> list[str]:
        """Names (camelCase) of required fields that are absent or falsy."""
        return [
            to_camel(name)
            for name in type(self).model_fields
            if not getattr(self, name)
        ]


class ProductDetailsUpdate(CamelModel):
    categories: str | None = None
    product_category_id: int | None = None


class ProductUpdate(CamelModel):
    """Partial update: only fields present in the payload are applied."""

    product_name: str | None = None
    # Strings are accepted; "" means "not supplied"
    old_price: float | str | None = None
    offer_price: float | str | None = None
    product_image: str | None = None
    product_details: ProductDetailsUpdate | None = None

    @property
    def clears_image(self) -> bool:
        return "product_image" in self.model_fields_set and self.product_image is None


class ProductDelete(CamelModel):
    image: str | None = None


class ProductDetails(CamelModel):
    categories: str
    product_category_id: int


class ProductOut(CamelModel):
    id: str
    product_name: str
    product_image: str | None = None
    old_price: float
    offer_price: float
    product_details: ProductDetails
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductOut":
        return cls(
            id=product.id,
            product_name=product.product_name,
            product_image=product.product_image,
            old_price=product.old_price,
            offer_price=product.offer_price,
            product_details=ProductDetails(
                categories=product.categories,
                product_category_id=product.product_category_id,
            ),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductSummary(CamelModel):
    """Flat projection used by the list endpoints."""

    id: str
    product_name: str
    old_price: float
    offer_price: float
    categories: str
    product_category_id: int
    image: str | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            id=product.id,
            product_name=product.product_name,
            old_price=product.old_price,
            offer_price=product.offer_price,
            categories=product.categories,
            product_category_id=product.product_category_id,
            image=product.product_image,
        )
