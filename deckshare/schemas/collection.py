from pydantic import BaseModel

from deckshare.core.enums import DeckColor
from deckshare.schemas.deck import DeckSummary


class FeaturedCollection(BaseModel):
    name: str
    color: DeckColor
    decks: list[DeckSummary]
