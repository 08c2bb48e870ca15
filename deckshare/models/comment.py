from datetime import datetime
from typing import TYPE_CHECKING

import sqlmodel

from deckshare.utils.misc import get_utc_now

from ._base import BaseModel

if TYPE_CHECKING:
    from deckshare.models.deck import Deck
    from deckshare.models.user import User


class Comment(BaseModel, table=True):
    __tablename__: str = "comments"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    content: str = sqlmodel.Field(max_length=600, sa_type=sqlmodel.Text)
    user_id: int = sqlmodel.Field(foreign_key="users.id", index=True)
    deck_id: int = sqlmodel.Field(foreign_key="decks.id", index=True)
    parent_id: int | None = sqlmodel.Field(
        foreign_key="comments.id", index=True, nullable=True, default=None
    )
    """Set on replies; always points at a top-level comment"""
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True), index=True
    )

    user: "User" = sqlmodel.Relationship()
    deck: "Deck" = sqlmodel.Relationship()

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None
