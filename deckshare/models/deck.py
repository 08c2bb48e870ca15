from datetime import datetime
from typing import TYPE_CHECKING

import sqlmodel

from deckshare.core.enums import DeckColor
from deckshare.utils.misc import get_utc_now

from ._base import BaseModel

if TYPE_CHECKING:
    from deckshare.models.deck_card import DeckCard
    from deckshare.models.user import User


class Deck(BaseModel, table=True):
    __tablename__: str = "decks"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    title: str = sqlmodel.Field(max_length=50)
    description: str | None = sqlmodel.Field(default=None, sa_type=sqlmodel.Text)
    color: DeckColor
    author_id: int = sqlmodel.Field(foreign_key="users.id", index=True)
    views: int = sqlmodel.Field(default=0, ge=0)
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True), index=True
    )
    updated_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )

    author: "User" = sqlmodel.Relationship()
    cards: list["DeckCard"] = sqlmodel.Relationship(
        back_populates="deck", sa_relationship_kwargs={"order_by": "DeckCard.id"}
    )

    @property
    def total_cards(self) -> int:
        return sum(deck_card.quantity for deck_card in self.cards)
