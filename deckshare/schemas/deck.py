from datetime import datetime
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field

from deckshare.core.enums import CardColor, DeckColor
from deckshare.schemas.card import CardRead

if TYPE_CHECKING:
    from deckshare.models.deck import Deck


class CompositionEntry(BaseModel):
    """One ``(card, quantity)`` pair of a deck composition as sent by the client."""

    card_id: int
    quantity: int


class DeckCreate(BaseModel):
    title: str = Field(min_length=1, max_length=50)
    description: str | None = None
    color: DeckColor
    username: str | None = None
    cards: list[CompositionEntry] = Field(default_factory=list)


class DeckUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=50)
    description: str | None = None
    color: DeckColor
    username: str | None = None
    cards: list[CompositionEntry] | None = Field(
        default=None, description="Replaces the whole composition when provided"
    )


class UsernameBody(BaseModel):
    """Body of operations that only identify the caller (like, export, delete)."""

    username: str | None = None


class DeckAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str


class DeckCardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: int
    quantity: int
    card: CardRead


class DeckSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    color: DeckColor
    author_id: int
    author: DeckAuthor
    views: int
    created_at: datetime
    updated_at: datetime
    likes_count: int = 0

    @classmethod
    def from_deck(cls, deck: "Deck", *, likes_count: int = 0) -> Self:
        return cls.model_validate(deck).model_copy(update={"likes_count": likes_count})


class DeckDetail(DeckSummary):
    cards: list[DeckCardRead]
    total_cards: int
    liked: bool = False

    @classmethod
    def from_deck(cls, deck: "Deck", *, likes_count: int = 0, liked: bool = False) -> Self:
        return cls.model_validate(deck).model_copy(
            update={"likes_count": likes_count, "liked": liked}
        )


class DeckSearchResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    color: DeckColor
    author: DeckAuthor


class LikeToggleResult(BaseModel):
    liked: bool
    likes_count: int


class PortableDeck(BaseModel):
    """Clipboard payload shared with the game client.

    The wire keys are camelCase (``deckName``, ``counts``) and must stay that way.
    """

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    deck_name: str = Field(alias="deckName")
    counts: dict[str, int]


class ImportedCard(BaseModel):
    card_id: int
    name: str
    color: CardColor
    quantity: int


class DeckImportResult(BaseModel):
    title: str
    color: DeckColor
    cards: list[ImportedCard]
    not_found_cards: list[str]

    @property
    def total_cards(self) -> int:
        return sum(card.quantity for card in self.cards)
