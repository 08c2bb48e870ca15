import sqlmodel

from ._base import BaseModel


class DeckView(BaseModel, table=True):
    """A browser session that has already been counted in ``Deck.views``."""

    __tablename__: str = "deck_views"
    __table_args__ = (
        sqlmodel.UniqueConstraint("deck_id", "session_id", name="uq_deck_view_session"),
    )

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    deck_id: int = sqlmodel.Field(foreign_key="decks.id", index=True)
    session_id: str = sqlmodel.Field(max_length=64)
