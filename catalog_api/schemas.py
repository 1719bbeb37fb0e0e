# catalog_api/schemas.py
"""Request and response bodies for the product endpoints.

Inputs reject unknown keys. ``name``, ``price`` and ``category`` are nullable
here on purpose: their presence is a business rule checked by
``CatalogService`` so that a missing one reports the same error everywhere.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from catalog_api.models.product import Category


class CampaignIn(BaseModel):
    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    name: str
    description: Optional[str] = None
    amount: float
    percentage: str


class ProductIn(BaseModel):
    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[Category] = None
    description: Optional[str] = None
    url: Optional[str] = None
    stock: str
    size: str
    composition: str
    color: str
    weight: str
    images: str


class ProductCreate(ProductIn):
    campaign: CampaignIn


class ProductUpdate(ProductIn):
    campaign: Optional[CampaignIn] = None


class _Out(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class CampaignOut(_Out):
    id: str
    product_id: str
    name: str
    description: Optional[str] = None
    amount: float
    percentage: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductOut(_Out):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    category: Category
    url: Optional[str] = None
    stock: str
    size: str
    composition: str
    color: str
    weight: str
    images: str
    campaign_id: str
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    campaign: Optional[CampaignOut] = None
