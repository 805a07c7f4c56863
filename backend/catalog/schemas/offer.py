from datetime import datetime

from catalog.models import Offer
from catalog.schemas.base import CamelModel


class OfferCreate(CamelModel):
    image_url: str | None = None


class OfferDelete(CamelModel):
    image_url: str | None = None


class OfferOut(CamelModel):
    id: str
    image_url: str
    created_at: datetime | None = None

    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferOut":
        return cls(id=offer.id, image_url=offer.image_url, created_at=offer.created_at)


class OfferSummary(CamelModel):
    id: str
    image: str

    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferSummary":
        return cls(id=offer.id, image=offer.image_url)
