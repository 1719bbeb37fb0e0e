# catalog_api/services/catalog_service.py
import logging
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.errors import NotFoundError, StoreError, ValidationError
from catalog_api.models.product import Campaign, Product, utcnow
from catalog_api.repositories.catalog_repo import CatalogRepo
from catalog_api.schemas import CampaignOut, ProductCreate, ProductIn, ProductOut, ProductUpdate

logger = logging.getLogger("catalog_api.catalog_service")


def _require_core_fields(payload: ProductIn) -> None:
    if not payload.name or payload.price is None or payload.category is None:
        raise ValidationError("Name, price, and category are required")


def to_product_out(product: Product, campaign: Optional[Campaign]) -> ProductOut:
    view = ProductOut.model_validate(product)
    view.campaign = CampaignOut.model_validate(campaign) if campaign is not None else None
    return view


class CatalogService:
    """Products, each paired with exactly one campaign."""

    def __init__(self, db: AsyncSession):
        self.repo = CatalogRepo(db)

    @asynccontextmanager
    async def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.repo.rollback()
            logger.error(f"Failed to {action}: {e}", exc_info=True)
            raise StoreError(f"Failed to {action}") from e

    async def create_product(self, payload: ProductCreate) -> str:
        """Create a product and its campaign; returns the new product id."""
        _require_core_fields(payload)

        product_id = str(uuid.uuid4())
        campaign_id = str(uuid.uuid4())
        now = utcnow()

        product = Product(
            id=product_id,
            campaign_id=campaign_id,
            deleted=False,
            created_at=now,
            updated_at=now,
            **payload.model_dump(exclude={"campaign"}),
        )
        campaign = Campaign(
            id=campaign_id,
            product_id=product_id,
            created_at=now,
            updated_at=now,
            **payload.campaign.model_dump(),
        )

        async with self._store_errors("create product"):
            await self.repo.create_with_campaign(product, campaign)

        logger.info(f"Created product {product_id} with campaign {campaign_id}")
        return product_id

    async def list_products(self) -> List[ProductOut]:
        async with self._store_errors("list products"):
            rows = await self.repo.list_active()
        return [to_product_out(product, campaign) for product, campaign in rows]

    async def get_product(self, product_id: str) -> ProductOut:
        async with self._store_errors("get product"):
            row = await self.repo.get_active(product_id)
        if row is None:
            raise NotFoundError("Product not found")
        return to_product_out(*row)

    async def update_product(self, product_id: str, payload: ProductUpdate) -> ProductOut:
        """Overwrite the supplied product fields, and campaign fields if given.

        Soft-deleted products are treated as missing.
        """
        _require_core_fields(payload)

        async with self._store_errors("update product"):
            row = await self.repo.get_active(product_id)
            if row is None:
                raise NotFoundError("Product not found")
            product, campaign = row
            now = utcnow()

            for key, value in payload.model_dump(exclude_unset=True, exclude={"campaign"}).items():
                setattr(product, key, value)
            product.updated_at = now

            if payload.campaign is not None:
                if campaign is None:
                    logger.warning(f"Product {product_id} has no campaign {product.campaign_id}; skipping campaign update")
                else:
                    for key, value in payload.campaign.model_dump(exclude_unset=True).items():
                        setattr(campaign, key, value)
                    campaign.updated_at = now

            await self.repo.save()

        logger.info(f"Updated product {product_id}")
        return to_product_out(product, campaign)

    async def delete_product(self, product_id: str) -> None:
        """Soft-delete. Repeating it, or deleting an unknown id, is a no-op."""
        async with self._store_errors("delete product"):
            matched = await self.repo.mark_deleted(product_id)
        if not matched:
            logger.info(f"Delete for unknown product {product_id} ignored")
