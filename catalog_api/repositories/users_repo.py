"""Repository for user credentials."""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from catalog_api.models.user import User


class UsersRepo:
    """Username / password-hash pairs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[User]:
        q = await self.db.execute(select(User).filter_by(username=username))
        return q.scalars().first()

    async def create_user(self, username: str, password_hash: str) -> User:
        """Insert a user. Raises IntegrityError if the username is taken."""
        user = User(username=username, password_hash=password_hash)
        self.db.add(user)
        await self.db.commit()
        return user
