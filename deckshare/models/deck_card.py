from typing import TYPE_CHECKING

import sqlmodel

from ._base import BaseModel

if TYPE_CHECKING:
    from deckshare.models.card import Card
    from deckshare.models.deck import Deck


class DeckCard(BaseModel, table=True):
    __tablename__: str = "deck_cards"
    __table_args__ = (
        sqlmodel.UniqueConstraint("deck_id", "card_id", name="uq_deck_card"),
        sqlmodel.CheckConstraint("quantity BETWEEN 1 AND 4", name="quantity_between_1_and_4"),
    )

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    deck_id: int = sqlmodel.Field(foreign_key="decks.id", index=True)
    card_id: int = sqlmodel.Field(foreign_key="cards.id", index=True)
    quantity: int = sqlmodel.Field(ge=1, le=4)

    deck: "Deck" = sqlmodel.Relationship(back_populates="cards")
    card: "Card" = sqlmodel.Relationship()
