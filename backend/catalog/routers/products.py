import logging
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.auth import require_auth
from catalog.db.database import get_session
from catalog.db.identifiers import parse_id
from catalog.deps import get_storage
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.models import PRODUCT_CATEGORY_IDS
from catalog.responses import respond
from catalog.schemas.product import (
    ProductCreate, ProductDelete, ProductOut, ProductSummary, ProductUpdate,
)
from catalog.services.product_service import product_service, check_category_id
from catalog.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _product_id(raw: str) -> str:
    product_id = parse_id(raw)
    if product_id is None:
        raise AppException(ErrorType.VALIDATION, "Invalid product ID")
    return product_id


@router.post("", dependencies=[Depends(require_auth)])
async def create_product(
    payload: ProductCreate,
    session: AsyncSession = Depends(get_session),
):
    if payload.missing_fields():
        raise AppException(ErrorType.VALIDATION, "All fields are required")
    check_category_id(payload.product_category_id)

    try:
        product = await product_service.create(session, payload)
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to create product")

    return respond(201, "Product created successfully", ProductOut.from_product(product))


@router.get("", dependencies=[Depends(require_auth)])
async def list_products(session: AsyncSession = Depends(get_session)):
    try:
        products = await product_service.list_all(session)
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to fetch products")

    return respond(200, "Products fetched successfully", [ProductSummary.from_product(p) for p in products])


@router.get("/category/{product_category_id}")
async def list_products_by_category(
    product_category_id: int,
    session: AsyncSession = Depends(get_session),
):
    # Ids outside the closed set can never match, and may not fit the column type
    if product_category_id not in PRODUCT_CATEGORY_IDS:
        raise AppException(ErrorType.NOT_FOUND, "No products found for this category")

    try:
        products = await product_service.list_by_category(session, product_category_id)
    except Exception as e:
        logger.error(f"Error fetching products by category: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to fetch products")

    # An empty category is reported as 404 rather than an empty list
    if not products:
        raise AppException(ErrorType.NOT_FOUND, "No products found for this category")

    return respond(200, "Products fetched successfully", [ProductSummary.from_product(p) for p in products])


@router.get("/{product_id}", dependencies=[Depends(require_auth)])
async def get_product(product_id: str, session: AsyncSession = Depends(get_session)):
    product_id = _product_id(product_id)

    try:
        product = await product_service.get(session, product_id)
    except Exception as e:
        logger.error(f"Error fetching product by ID: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to fetch product")

    if product is None:
        raise AppException(ErrorType.NOT_FOUND, "Product not found")

    return respond(200, "Product fetched successfully", ProductOut.from_product(product))


@router.put("/{product_id}", dependencies=[Depends(require_auth)])
async def update_product(
    product_id: str,
    patch: ProductUpdate,
    session: AsyncSession = Depends(get_session),
    storage: StorageService = Depends(get_storage),
):
    product_id = _product_id(product_id)

    try:
        product = await product_service.get(session, product_id)
        if product is None:
            raise AppException(ErrorType.NOT_FOUND, "Product not found")

        product = await product_service.update(session, storage, product, patch)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error updating product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to update product")

    return respond(200, "Product updated successfully", ProductOut.from_product(product))


@router.delete("/{product_id}", dependencies=[Depends(require_auth)])
async def delete_product(
    product_id: str,
    payload: ProductDelete | None = Body(default=None),
    session: AsyncSession = Depends(get_session),
    storage: StorageService = Depends(get_storage),
):
    product_id = _product_id(product_id)

    # Image cleanup runs first and never blocks the record delete
    if payload is not None and payload.image:
        await storage.discard_image(payload.image)

    try:
        deleted = await product_service.delete(session, product_id)
    except Exception as e:
        logger.error(f"Error deleting product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to delete product")

    if not deleted:
        raise AppException(ErrorType.NOT_FOUND, "Product not found")

    return respond(200, "Product deleted successfully")
