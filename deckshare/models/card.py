from datetime import datetime

import sqlmodel

from deckshare.core.enums import CardColor
from deckshare.utils.misc import get_utc_now

from ._base import BaseModel


class Card(BaseModel, table=True):
    __tablename__: str = "cards"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    name: str = sqlmodel.Field(max_length=100, unique=True, index=True)
    color: CardColor
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )

    def __str__(self) -> str:
        return f"{self.name} (#{self.id})"


# Catalog names are unique regardless of case
sqlmodel.Index("uq_cards_name_lower", sqlmodel.func.lower(sqlmodel.col(Card.name)), unique=True)
