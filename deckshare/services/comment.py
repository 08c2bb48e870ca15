from collections import defaultdict
from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy import delete
from sqlalchemy.orm import selectinload
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare.core.db import get_db
from deckshare.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from deckshare.models.comment import Comment
from deckshare.models.deck import Deck
from deckshare.schemas.comment import CommentCreate, CommentRead, CommentThread
from deckshare.services.user import UserService

MAX_COMMENT_LENGTH = 600


class CommentService:
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db)],
        user_service: Annotated[UserService, Depends()],
    ) -> None:
        self.db = db
        self.user_service = user_service

    async def get_comment(self, comment_id: int) -> Comment | None:
        result = await self.db.exec(
            select(Comment)
            .where(Comment.id == comment_id)
            .options(selectinload(Comment.user))  # pyright: ignore[reportArgumentType]
            .execution_options(populate_existing=True)
        )
        return result.first()

    async def get_thread(self, deck_id: int) -> list[CommentThread]:
        """Top-level comments newest first, each with its replies oldest first."""
        result = await self.db.exec(
            select(Comment)
            .where(Comment.deck_id == deck_id)
            .options(selectinload(Comment.user))  # pyright: ignore[reportArgumentType]
            .order_by(col(Comment.created_at).asc(), col(Comment.id).asc())
        )
        comments = result.all()

        replies: defaultdict[int, list[CommentRead]] = defaultdict(list)
        for comment in comments:
            if comment.parent_id is not None:
                replies[comment.parent_id].append(CommentRead.model_validate(comment))

        threads = [
            CommentThread.model_validate(comment).model_copy(
                update={"replies": replies.get(comment.id, [])}
            )
            for comment in comments
            if comment.parent_id is None
        ]
        threads.reverse()
        return threads

    async def get_all_comments(self) -> Sequence[Comment]:
        """Every comment on every deck, newest first, for moderation."""
        result = await self.db.exec(
            select(Comment)
            .options(
                selectinload(Comment.user),  # pyright: ignore[reportArgumentType]
                selectinload(Comment.deck),  # pyright: ignore[reportArgumentType]
            )
            .order_by(col(Comment.created_at).desc(), col(Comment.id).desc())
        )
        return result.all()

    async def post_comment(self, deck_id: int, comment_data: CommentCreate) -> Comment:
        user = await self.user_service.resolve(comment_data.username)

        if len(comment_data.content) > MAX_COMMENT_LENGTH:
            raise ValidationError(f"Comment exceeds {MAX_COMMENT_LENGTH} characters")
        content = comment_data.content.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")

        deck_result = await self.db.exec(select(Deck.id).where(Deck.id == deck_id))
        if deck_result.first() is None:
            raise NotFoundError("Deck not found")

        if comment_data.parent_id is not None:
            parent = await self.get_comment(comment_data.parent_id)
            if not parent or parent.deck_id != deck_id:
                raise NotFoundError("Parent comment not found")
            if parent.is_reply:
                raise ValidationError("Replies cannot be replied to")

        comment = Comment(
            content=content, user_id=user.id, deck_id=deck_id, parent_id=comment_data.parent_id
        )
        self.db.add(comment)
        await self.db.commit()

        created = await self.get_comment(comment.id)
        if not created:
            raise NotFoundError("Comment not found")
        return created

    async def _delete_with_replies(self, comment_id: int) -> None:
        await self.db.exec(
            delete(Comment).where(
                or_(col(Comment.id) == comment_id, col(Comment.parent_id) == comment_id)
            )
        )
        await self.db.commit()

    async def delete_comment(self, deck_id: int, comment_id: int, username: str | None) -> None:
        """Delete a comment as its author; replies of a top-level comment go with it.

        There is no moderator override here, moderators use :meth:`force_delete_comment`.
        """
        user = await self.user_service.resolve(username)

        comment = await self.get_comment(comment_id)
        if not comment or comment.deck_id != deck_id:
            raise NotFoundError("Comment not found")

        if comment.user_id != user.id:
            raise ForbiddenError("Not authorized to delete this comment")

        await self._delete_with_replies(comment_id)
        logger.info(f"User {username} deleted comment #{comment_id} on deck #{deck_id}")

    async def force_delete_comment(self, comment_id: int) -> None:
        comment = await self.get_comment(comment_id)
        if not comment:
            raise NotFoundError("Comment not found")

        await self._delete_with_replies(comment_id)
        logger.info(f"Moderator deleted comment #{comment_id} on deck #{comment.deck_id}")
