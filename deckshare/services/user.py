from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare.core.db import get_db
from deckshare.core.exceptions import ConflictError, UnauthenticatedError, ValidationError
from deckshare.core.security import hash_password, verify_password
from deckshare.models.user import User


class UserService:
    """Thin user store: credential checks and username resolution, no sessions."""

    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self.db.exec(select(User).where(User.username == username))
        return result.first()

    async def resolve(self, username: str | None) -> User:
        """Return the user behind ``username`` or raise ``UnauthenticatedError``."""
        if not username:
            raise UnauthenticatedError("Not authenticated")

        user = await self.get_user_by_username(username)
        if not user:
            raise UnauthenticatedError("User not found")
        return user

    async def signup(self, username: str, password: str) -> User:
        username = username.strip()
        if not username or not password:
            raise ValidationError("Username and password required")

        if await self.get_user_by_username(username):
            raise ConflictError("Username taken")

        user = User(username=username, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Username taken") from None

        await self.db.refresh(user)
        logger.info(f"Registered user {user.username} (#{user.id})")
        return user

    async def login(self, username: str, password: str) -> User:
        if not username or not password:
            raise ValidationError("Username and password required")

        user = await self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthenticatedError("Invalid credentials")
        return user
