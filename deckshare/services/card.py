from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare.core.db import get_db
from deckshare.core.exceptions import ConflictError, NotFoundError, ValidationError
from deckshare.models.card import Card
from deckshare.models.deck_card import DeckCard
from deckshare.schemas.card import CardCreate


class CardService:
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def get_cards(self) -> Sequence[Card]:
        result = await self.db.exec(select(Card).order_by(col(Card.name).asc()))
        return result.all()

    async def get_card(self, card_id: int) -> Card | None:
        result = await self.db.exec(select(Card).where(Card.id == card_id))
        return result.first()

    async def get_card_by_name(self, name: str) -> Card | None:
        """Case-insensitive exact name lookup."""
        result = await self.db.exec(select(Card).where(func.lower(Card.name) == name.lower()))
        return result.first()

    async def get_cards_by_ids(self, card_ids: Sequence[int]) -> dict[int, Card]:
        if not card_ids:
            return {}
        result = await self.db.exec(select(Card).where(col(Card.id).in_(card_ids)))
        return {card.id: card for card in result.all()}

    async def create_card(self, card_data: CardCreate) -> Card:
        name = card_data.name.strip()
        if not name:
            raise ValidationError("Card name required")
        if await self.get_card_by_name(name):
            raise ConflictError("Card with this name already exists")

        card = Card(name=name, color=card_data.color)
        self.db.add(card)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Card with this name already exists") from None

        await self.db.refresh(card)
        logger.info(f"Created card {card}")
        return card

    async def delete_card(self, card_id: int) -> None:
        """Delete a catalog card that no deck composition references."""
        card = await self.get_card(card_id)
        if not card:
            raise NotFoundError("Card not found")

        result = await self.db.exec(
            select(func.count(col(DeckCard.id))).where(DeckCard.card_id == card_id)
        )
        usages = result.one()
        if usages:
            raise ConflictError(f"Card is used in {usages} deck(s) and cannot be deleted")

        await self.db.delete(card)
        await self.db.commit()
        logger.info(f"Deleted card {card}")
