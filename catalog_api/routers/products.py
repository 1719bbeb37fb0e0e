# catalog_api/routers/products.py
# current_user comes first in every route so the token is checked before a
# DB session is opened
import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends

from catalog_api.deps import get_catalog_service, get_current_user
from catalog_api.schemas import ProductCreate, ProductUpdate
from catalog_api.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])
logger = logging.getLogger("catalog_api.products")


@router.post("")
async def create_product(
    payload: ProductCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    logger.info(f"POST /products by {current_user['username']}")
    product_id = await catalog.create_product(payload)
    return {
        "status": "SUCCESS",
        "message": "Product created successfully",
        "product": {"productId": product_id},
    }


@router.get("")
async def list_products(
    current_user: Dict[str, Any] = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    products = await catalog.list_products()
    return {
        "status": "SUCCESS",
        "products": [p.model_dump(by_alias=True, mode="json") for p in products],
    }


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    product = await catalog.get_product(product_id)
    return {"status": "SUCCESS", "product": product.model_dump(by_alias=True, mode="json")}


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    logger.info(f"PUT /products/{product_id} by {current_user['username']}")
    await catalog.update_product(product_id, payload)
    return {"status": "SUCCESS", "message": "Product updated successfully"}


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    logger.info(f"DELETE /products/{product_id} by {current_user['username']}")
    await catalog.delete_product(product_id)
    return {"status": "SUCCESS", "message": "Product deleted successfully"}
