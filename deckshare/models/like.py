from datetime import datetime

import sqlmodel

from deckshare.utils.misc import get_utc_now

from ._base import BaseModel


class Like(BaseModel, table=True):
    __tablename__: str = "likes"
    __table_args__ = (sqlmodel.UniqueConstraint("user_id", "deck_id", name="uq_like_user_deck"),)

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    user_id: int = sqlmodel.Field(foreign_key="users.id", index=True)
    deck_id: int = sqlmodel.Field(foreign_key="decks.id", index=True)
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )
