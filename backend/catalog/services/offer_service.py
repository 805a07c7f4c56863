from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Offer


class OfferService:
    async def create(self, session: AsyncSession, image_url: str) -> Offer:
        offer = Offer(image_url=image_url)
        session.add(offer)
        await session.commit()
        await session.refresh(offer)
        return offer

    async def list_all(self, session: AsyncSession) -> list[Offer]:
        result = await session.execute(select(Offer).order_by(Offer.created_at))
        return list(result.scalars().all())

    async def get(self, session: AsyncSession, offer_id: str) -> Offer | None:
        return await session.get(Offer, offer_id)

    async def delete(self, session: AsyncSession, offer_id: str) -> bool:
        """Delete an offer image record. Returns False if it didn't exist."""
        offer = await self.get(session, offer_id)
        if offer is None:
            return False
        await session.delete(offer)
        await session.commit()
        return True


offer_service = OfferService()
