import logging
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.auth import require_auth
from catalog.db.database import get_session
from catalog.db.identifiers import parse_id
from catalog.deps import get_storage
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.responses import respond
from catalog.schemas.offer import OfferCreate, OfferDelete, OfferOut, OfferSummary
from catalog.services.offer_service import offer_service
from catalog.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products/offerImage", tags=["offers"])


@router.get("")
async def list_offer_images(session: AsyncSession = Depends(get_session)):
    try:
        offers = await offer_service.list_all(session)
    except Exception as e:
        logger.error(f"Error fetching offer images: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to fetch offer images")

    return respond(200, "Offer images fetched successfully", [OfferSummary.from_offer(o) for o in offers])


@router.post("", dependencies=[Depends(require_auth)])
async def create_offer_image(
    payload: OfferCreate,
    session: AsyncSession = Depends(get_session),
):
    if not payload.image_url:
        raise AppException(ErrorType.VALIDATION, "Image URL is required")

    try:
        offer = await offer_service.create(session, payload.image_url)
    except Exception as e:
        logger.error(f"Error creating offer image: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to create offer image")

    return respond(201, "Offer image created successfully", OfferOut.from_offer(offer))


@router.delete("/{offer_id}", dependencies=[Depends(require_auth)])
async def delete_offer_image(
    offer_id: str,
    payload: OfferDelete | None = Body(default=None),
    session: AsyncSession = Depends(get_session),
    storage: StorageService = Depends(get_storage),
):
    offer_id = parse_id(offer_id)
    if offer_id is None:
        raise AppException(ErrorType.VALIDATION, "Invalid offer image ID")

    if payload is not None and payload.image_url:
        await storage.discard_image(payload.image_url)

    try:
        deleted = await offer_service.delete(session, offer_id)
    except Exception as e:
        logger.error(f"Error deleting offer image: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Failed to delete offer image")

    if not deleted:
        raise AppException(ErrorType.NOT_FOUND, "Offer image not found")

    return respond(200, "Offer image deleted successfully")
