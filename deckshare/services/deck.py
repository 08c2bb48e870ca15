from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Annotated, Any

from fastapi import Depends
from loguru import logger
from sqlalchemy import delete, func
from sqlalchemy.orm import selectinload
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare import codec
from deckshare.core.config import settings
from deckshare.core.db import get_db
from deckshare.core.enums import DeckColor
from deckshare.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from deckshare.models.comment import Comment
from deckshare.models.deck import Deck
from deckshare.models.deck_card import DeckCard
from deckshare.models.deck_view import DeckView
from deckshare.models.like import Like
from deckshare.schemas.deck import (
    CompositionEntry,
    DeckCreate,
    DeckImportResult,
    DeckUpdate,
    PortableDeck,
)
from deckshare.services.card import CardService
from deckshare.services.engagement import EngagementService
from deckshare.services.user import UserService
from deckshare.utils.description import format_description
from deckshare.utils.misc import get_utc_now

DECK_SIZE = 52
MAX_COPIES = 4


class DeckService:
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db)],
        user_service: Annotated[UserService, Depends()],
        card_service: Annotated[CardService, Depends()],
        engagement_service: Annotated[EngagementService, Depends()],
    ) -> None:
        self.db = db
        self.user_service = user_service
        self.card_service = card_service
        self.engagement_service = engagement_service

    async def get_deck(self, deck_id: int) -> Deck | None:
        result = await self.db.exec(select(Deck).where(Deck.id == deck_id))
        return result.first()

    async def get_deck_detail(self, deck_id: int) -> Deck | None:
        """Load a deck with its author and every composition row joined to its card."""
        result = await self.db.exec(
            select(Deck)
            .where(Deck.id == deck_id)
            .options(
                selectinload(Deck.author),  # pyright: ignore[reportArgumentType]
                selectinload(Deck.cards).selectinload(DeckCard.card),  # pyright: ignore[reportArgumentType]
            )
            .execution_options(populate_existing=True)
        )
        return result.first()

    async def _require_detail(self, deck_id: int) -> Deck:
        deck = await self.get_deck_detail(deck_id)
        if not deck:
            raise NotFoundError("Deck not found")
        return deck

    async def get_decks(
        self, *, color: DeckColor | None = None, most_liked: bool = False, limit: int | None = None
    ) -> Sequence[tuple[Deck, int]]:
        """Decks with their like counts, newest first unless ``most_liked``."""
        likes = (
            select(Like.deck_id, func.count(col(Like.id)).label("likes_count"))
            .group_by(col(Like.deck_id))
            .subquery()
        )
        likes_count = func.coalesce(likes.c.likes_count, 0)

        query = (
            select(Deck, likes_count)
            .outerjoin(likes, likes.c.deck_id == Deck.id)
            .options(selectinload(Deck.author))  # pyright: ignore[reportArgumentType]
        )
        if color is not None:
            query = query.where(Deck.color == color)
        if most_liked:
            query = query.order_by(likes_count.desc())
        query = query.order_by(col(Deck.created_at).desc(), col(Deck.id).desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.exec(query)
        return result.all()

    async def search_decks(self, query: str) -> Sequence[Deck]:
        """Case-insensitive title/description search, newest first, capped at ``search_limit``."""
        query = query.strip()
        if not query:
            return []

        result = await self.db.exec(
            select(Deck)
            .where(
                or_(
                    col(Deck.title).icontains(query, autoescape=True),
                    col(Deck.description).icontains(query, autoescape=True),
                )
            )
            .options(selectinload(Deck.author))  # pyright: ignore[reportArgumentType]
            .order_by(col(Deck.created_at).desc(), col(Deck.id).desc())
            .limit(settings.search_limit)
        )
        return result.all()

    async def validate_composition(self, cards: Sequence[CompositionEntry]) -> None:
        """Enforce the deck building rules.

        Raises:
            ValidationError: A card is listed twice, a quantity is outside
                1..4, the total is not 52, or a card is not in the catalog.
        """
        duplicates = [
            card_id for card_id, n in Counter(c.card_id for c in cards).items() if n > 1
        ]
        if duplicates:
            raise ValidationError(f"Cards listed more than once: {duplicates}")

        for entry in cards:
            if not 1 <= entry.quantity <= MAX_COPIES:
                raise ValidationError(
                    f"Card quantity must be between 1 and {MAX_COPIES} (card #{entry.card_id})"
                )

        total = sum(entry.quantity for entry in cards)
        if total != DECK_SIZE:
            raise ValidationError(
                f"Your deck must contain exactly {DECK_SIZE} cards (got {total})"
            )

        card_ids = [entry.card_id for entry in cards]
        known = await self.card_service.get_cards_by_ids(card_ids)
        missing = [card_id for card_id in card_ids if card_id not in known]
        if missing:
            raise ValidationError(f"Unknown cards: {missing}")

    def _add_composition(self, deck_id: int, cards: Sequence[CompositionEntry]) -> None:
        self.db.add_all(
            [
                DeckCard(deck_id=deck_id, card_id=entry.card_id, quantity=entry.quantity)
                for entry in cards
            ]
        )

    async def create_deck(self, deck_data: DeckCreate) -> Deck:
        author = await self.user_service.resolve(deck_data.username)
        await self.validate_composition(deck_data.cards)

        deck = Deck(
            title=deck_data.title,
            description=format_description(deck_data.description),
            color=deck_data.color,
            author_id=author.id,
        )
        self.db.add(deck)
        await self.db.flush()  # To get deck.id

        self._add_composition(deck.id, deck_data.cards)
        await self.db.commit()
        logger.info(f"User {author.username} created deck #{deck.id} {deck.title!r}")

        return await self._require_detail(deck.id)

    async def update_deck(self, deck_id: int, deck_data: DeckUpdate) -> Deck:
        """Update a deck as its author.

        A provided composition replaces the previous one entirely.
        """
        deck = await self.get_deck(deck_id)
        if not deck:
            raise NotFoundError("Deck not found")

        user = await self.user_service.resolve(deck_data.username)
        if deck.author_id != user.id:
            raise ForbiddenError("Not authorized")

        if deck_data.cards is not None:
            await self.validate_composition(deck_data.cards)

        deck.title = deck_data.title
        deck.description = format_description(deck_data.description)
        deck.color = deck_data.color
        deck.updated_at = get_utc_now()
        self.db.add(deck)

        if deck_data.cards is not None:
            await self.db.exec(delete(DeckCard).where(col(DeckCard.deck_id) == deck_id))
            self._add_composition(deck_id, deck_data.cards)

        await self.db.commit()
        logger.info(f"User {user.username} updated deck #{deck_id}")

        return await self._require_detail(deck_id)

    async def delete_deck(
        self, deck_id: int, *, username: str | None, is_moderator: bool = False
    ) -> None:
        """Delete a deck with its likes, views, composition and comments.

        Allowed for the author or a moderator.
        """
        deck = await self.get_deck(deck_id)
        if not deck:
            raise NotFoundError("Deck not found")

        if not is_moderator:
            user = await self.user_service.resolve(username)
            if deck.author_id != user.id:
                raise ForbiddenError("Not authorized to delete this deck")

        await self.db.exec(delete(Like).where(col(Like.deck_id) == deck_id))
        await self.db.exec(delete(DeckView).where(col(DeckView.deck_id) == deck_id))
        await self.db.exec(delete(DeckCard).where(col(DeckCard.deck_id) == deck_id))
        await self.db.exec(
            delete(Comment).where(
                col(Comment.deck_id) == deck_id, col(Comment.parent_id).is_not(None)
            )
        )
        await self.db.exec(delete(Comment).where(col(Comment.deck_id) == deck_id))
        await self.db.exec(delete(Deck).where(col(Deck.id) == deck_id))
        await self.db.commit()
        logger.info(
            f"Deck #{deck_id} deleted by {'moderator' if is_moderator else username}"
        )

    async def view_deck(
        self, deck_id: int, *, session_id: str | None = None, username: str | None = None
    ) -> tuple[Deck, int, bool]:
        """Read path of the deck page.

        Counts the view for an unseen ``session_id`` and reports whether
        ``username`` likes the deck.

        Returns:
            The loaded deck, its like count and the ``liked`` flag.
        """
        if await self.get_deck(deck_id) is None:
            raise NotFoundError("Deck not found")

        if session_id:
            await self.engagement_service.record_view(deck_id, session_id)

        deck = await self._require_detail(deck_id)
        likes_count = await self.engagement_service.count_likes(deck_id)
        liked = await self.engagement_service.has_liked(deck_id, username) if username else False
        return deck, likes_count, liked

    async def export_deck(self, deck_id: int, username: str | None) -> PortableDeck:
        await self.user_service.resolve(username)

        deck = await self.get_deck_detail(deck_id)
        if not deck:
            raise NotFoundError("Deck not found")
        return codec.export_deck(deck)

    async def import_deck(self, payload: str | Mapping[str, Any]) -> DeckImportResult:
        """Match a pasted portable deck against the current catalog.

        Nothing is persisted; the result prefills a new deck for the client.
        """
        catalog = await self.card_service.get_cards()
        return codec.import_deck(payload, catalog)
