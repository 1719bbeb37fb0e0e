# catalog_api/deps.py
from typing import Any, Dict
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.config import Settings
from catalog_api.services.auth_service import AuthService, verify_token
from catalog_api.services.catalog_service import CatalogService
from catalog_api.utils.database import get_db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(db, settings)


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


async def get_current_user(request: Request, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """
    Expect the token in the `auth` header (name configurable).
    Returns the decoded claims or raises AuthError.
    """
    claims = verify_token(request.headers.get(settings.auth_header), settings)
    request.state.user = claims
    return claims
