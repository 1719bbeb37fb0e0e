import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Any, Dict, Optional

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.config import Settings
from catalog_api.errors import AuthError, ConflictError, StoreError, ValidationError
from catalog_api.repositories.users_repo import UsersRepo

logger = logging.getLogger("catalog_api.auth_service")

# bcrypt rejects (>=5.0) or truncates anything longer
MAX_PASSWORD_BYTES = 72


# ---------------- PASSWORD HASHING ----------------

def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


# ---------------- JWT TOKENS ----------------

def create_access_token(username: str, secret: str, algorithm: str = "HS256",
                        expires_delta: timedelta = timedelta(hours=1)) -> str:
    """Generate a signed JWT carrying the username."""
    now = datetime.now(timezone.utc)
    payload = {"username": username, "iat": now, "exp": now + expires_delta}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """Decode and validate a token, raising AuthError on any failure."""
    try:
        return jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["exp", "username"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.PyJWTError as e:
        logger.info(f"Rejected token: {e}")
        raise AuthError("Invalid token")


def verify_token(token: Optional[str], settings: Settings) -> Dict[str, Any]:
    if not token:
        raise AuthError("Access denied")
    return decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)


# ---------------- SERVICE ----------------

class AuthService:
    """Registration, login and token verification."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.settings = settings
        self.users = UsersRepo(db)
        self.db = db

    @asynccontextmanager
    async def _store_errors(self, message: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{message}: {e}", exc_info=True)
            raise StoreError(message) from e

    async def register(self, username: str, password: str) -> None:
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        async with self._store_errors("Registration failed"):
            existing = await self.users.get_by_username(username)
        if existing:
            raise ConflictError("Username already exists")

        # bcrypt is slow on purpose; keep it off the event loop
        loop = asyncio.get_running_loop()
        password_hash = await loop.run_in_executor(
            None, partial(hash_password, password, self.settings.bcrypt_rounds)
        )
        async with self._store_errors("Registration failed"):
            try:
                await self.users.create_user(username, password_hash)
            except IntegrityError:
                await self.db.rollback()
                raise ConflictError("Username already exists")

    async def login(self, username: str, password: str) -> str:
        async with self._store_errors("Login failed"):
            user = await self.users.get_by_username(username)
        if not user:
            raise AuthError("Authentication failed")

        loop = asyncio.get_running_loop()
        ok = await loop.run_in_executor(None, verify_password, password, user.password_hash)
        if not ok:
            raise AuthError("Authentication failed")

        return create_access_token(
            user.username,
            self.settings.jwt_secret,
            self.settings.jwt_algorithm,
            timedelta(minutes=self.settings.jwt_expire_minutes),
        )

    def verify(self, token: Optional[str]) -> Dict[str, Any]:
        return verify_token(token, self.settings)
