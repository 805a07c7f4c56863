import math
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.models import Product, PRODUCT_CATEGORY_IDS
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.storage_service import StorageService


def check_category_id(category_id: int) -> None:
    if category_id not in PRODUCT_CATEGORY_IDS:
        raise AppException(
            ErrorType.VALIDATION,
            f"productCategoryId must be between {PRODUCT_CATEGORY_IDS[0]} and {PRODUCT_CATEGORY_IDS[-1]}"
        )


def _to_price(field: str, value: float | str) -> float:
    try:
        price = float(value)
    except ValueError:
        raise AppException(ErrorType.VALIDATION, f"{field} must be a number")
    if not math.isfinite(price):
        raise AppException(ErrorType.VALIDATION, f"{field} must be a number")
    return price


class ProductService:
    async def create(self, session: AsyncSession, data: ProductCreate) -> Product:
        product = Product(
            product_name=data.product_name,
            old_price=data.old_price,
            offer_price=data.offer_price,
            categories=data.categories,
            product_category_id=data.product_category_id,
            product_image=data.product_image,
        )
        session.add(product)
        await session.commit()
        await session.refresh(product)
        return product

    async def get(self, session: AsyncSession, product_id: str) -> Product | None:
        return await session.get(Product, product_id)

    async def list_all(self, session: AsyncSession) -> list[Product]:
        result = await session.execute(select(Product).order_by(Product.created_at))
        return list(result.scalars().all())

    async def list_by_category(self, session: AsyncSession, category_id: int) -> list[Product]:
        result = await session.execute(
            select(Product)
            .where(Product.product_category_id == category_id)
            .order_by(Product.created_at)
        )
        return list(result.scalars().all())

    def build_changes(self, patch: ProductUpdate) -> dict[str, Any]:
        """Column values for the non-image fields present in the patch.

        Raises:
            AppException: VALIDATION for non-numeric prices or an unknown category id
        """
        changes: dict[str, Any] = {}

        if patch.product_name:
            changes["product_name"] = patch.product_name
        if patch.old_price is not None and patch.old_price != "":
            changes["old_price"] = _to_price("oldPrice", patch.old_price)
        if patch.offer_price is not None and patch.offer_price != "":
            changes["offer_price"] = _to_price("offerPrice", patch.offer_price)

        # Both category columns are gated on productCategoryId, categories included
        details = patch.product_details
        if details is not None and details.product_category_id:
            check_category_id(details.product_category_id)
            changes["product_category_id"] = details.product_category_id
            if details.categories is not None:
                changes["categories"] = details.categories

        return changes

    async def update(
        self,
        session: AsyncSession,
        storage: StorageService,
        product: Product,
        patch: ProductUpdate,
    ) -> Product:
        """Apply a partial update, discarding the old image when it is replaced or removed."""
        changes = self.build_changes(patch)

        old_image = product.product_image
        if patch.clears_image:
            changes["product_image"] = None
            if old_image:
                await storage.discard_image(old_image)
        elif patch.product_image and patch.product_image != old_image:
            if old_image:
                await storage.discard_image(old_image)
            changes["product_image"] = patch.product_image

        for column, value in changes.items():
            setattr(product, column, value)
        await session.commit()
        await session.refresh(product)
        return product

    async def delete(self, session: AsyncSession, product_id: str) -> bool:
        """Delete a product record. Returns False if it didn't exist."""
        product = await self.get(session, product_id)
        if product is None:
            return False
        await session.delete(product)
        await session.commit()
        return True


product_service = ProductService()
