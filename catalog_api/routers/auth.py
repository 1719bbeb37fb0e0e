from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict
import logging

from catalog_api.deps import get_auth_service, get_current_user
from catalog_api.services.auth_service import MAX_PASSWORD_BYTES, AuthService

router = APIRouter(tags=["auth"])

logger = logging.getLogger("catalog_api.auth")


# ---------------------- MODELS ----------------------
class RegisterIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # the limit is in UTF-8 bytes, not characters
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    password: str


# ---------------------- ROUTES ----------------------
@router.post("/register")
async def register(payload: RegisterIn, auth_service: AuthService = Depends(get_auth_service)):
    logger.info(f"POST /register received for username: {payload.username}")

    await auth_service.register(payload.username, payload.password)

    logger.info(f"User registered successfully: {payload.username}")
    return {"status": "Success", "message": "User registered successfully"}


@router.post("/login")
async def login(payload: LoginIn, auth_service: AuthService = Depends(get_auth_service)):
    logger.info(f"POST /login received for username: {payload.username}")

    token = await auth_service.login(payload.username, payload.password)

    logger.info(f"User logged in successfully: {payload.username}")
    return {"status": "Success", "message": "Login successful", "token": token}


@router.get("/protected")
async def protected(current_user: Dict[str, Any] = Depends(get_current_user)):
    return {"message": "Protected route accessed"}
