from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare.core.db import get_db
from deckshare.core.exceptions import NotFoundError
from deckshare.models.deck import Deck
from deckshare.models.deck_view import DeckView
from deckshare.models.like import Like
from deckshare.services.user import UserService


class EngagementService:
    """Likes and session-deduplicated view counts of decks."""

    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db)],
        user_service: Annotated[UserService, Depends()],
    ) -> None:
        self.db = db
        self.user_service = user_service

    async def count_likes(self, deck_id: int) -> int:
        result = await self.db.exec(
            select(func.count(col(Like.id))).where(Like.deck_id == deck_id)
        )
        return result.one()

    async def find_like(self, deck_id: int, user_id: int) -> Like | None:
        result = await self.db.exec(
            select(Like).where(Like.user_id == user_id, Like.deck_id == deck_id)
        )
        return result.first()

    async def has_liked(self, deck_id: int, username: str) -> bool:
        user = await self.user_service.get_user_by_username(username)
        if not user:
            return False
        return await self.find_like(deck_id, user.id) is not None

    async def toggle_like(self, deck_id: int, username: str | None) -> tuple[bool, int]:
        """Like the deck if the user has not yet, unlike it otherwise.

        Returns:
            The new like state and the freshly counted number of likes.
        """
        user = await self.user_service.resolve(username)
        user_id = user.id

        deck_result = await self.db.exec(select(Deck.id).where(Deck.id == deck_id))
        if deck_result.first() is None:
            raise NotFoundError("Deck not found")

        if await self.find_like(deck_id, user_id):
            await self.db.exec(delete(Like).where(Like.user_id == user_id, Like.deck_id == deck_id))
            await self.db.commit()
            liked = False
        else:
            self.db.add(Like(user_id=user_id, deck_id=deck_id))
            try:
                await self.db.commit()
            except IntegrityError:
                # A concurrent toggle inserted the same like first
                await self.db.rollback()
                logger.debug(f"Like of deck #{deck_id} by user #{user_id} already recorded")
            liked = True

        return liked, await self.count_likes(deck_id)

    async def record_view(self, deck_id: int, session_id: str) -> bool:
        """Count one view per browser session.

        The ``(deck_id, session_id)`` unique constraint makes the marker insert
        the guard: a duplicate rolls back the whole transaction, increment
        included.

        Returns:
            Whether this call counted a new view.
        """
        self.db.add(DeckView(deck_id=deck_id, session_id=session_id))
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            return False

        await self.db.exec(
            update(Deck).where(col(Deck.id) == deck_id).values(views=col(Deck.views) + 1)
        )
        await self.db.commit()
        return True
