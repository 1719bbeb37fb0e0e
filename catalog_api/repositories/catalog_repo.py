"""Repository for products and their campaigns."""

from typing import List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from catalog_api.models.product import Campaign, Product


class CatalogRepo:
    """Product and Campaign rows.

    Reads never return soft-deleted products. Writes are committed here so a
    caller sees either the whole change or none of it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active_with_campaign(self):
        return (
            select(Product, Campaign)
            .outerjoin(Campaign, Campaign.id == Product.campaign_id)
            .where(Product.deleted.is_(False))
        )

    async def create_with_campaign(self, product: Product, campaign: Campaign) -> None:
        """Persist a product and its campaign in one transaction."""
        self.db.add(product)
        # product row first, campaigns.product_id references it
        await self.db.flush()
        self.db.add(campaign)
        await self.db.commit()

    async def list_active(self) -> List[Tuple[Product, Optional[Campaign]]]:
        q = await self.db.execute(self._active_with_campaign())
        return [(product, campaign) for product, campaign in q.all()]

    async def get_active(self, product_id: str) -> Optional[Tuple[Product, Optional[Campaign]]]:
        q = await self.db.execute(self._active_with_campaign().where(Product.id == product_id))
        row = q.first()
        if row is None:
            return None
        product, campaign = row
        return product, campaign

    async def save(self) -> None:
        await self.db.commit()

    async def mark_deleted(self, product_id: str) -> int:
        """Flip the soft-delete flag. Returns the number of matched rows."""
        result = await self.db.execute(
            update(Product).where(Product.id == product_id).values(deleted=True)
        )
        await self.db.commit()
        return result.rowcount

    async def rollback(self) -> None:
        await self.db.rollback()
