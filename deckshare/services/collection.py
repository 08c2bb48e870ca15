from typing import Annotated

from fastapi import Depends

from deckshare.core.config import settings
from deckshare.core.enums import DeckColor
from deckshare.schemas.collection import FeaturedCollection
from deckshare.schemas.deck import DeckSummary
from deckshare.services.deck import DeckService

FEATURED_COLLECTIONS: tuple[tuple[str, DeckColor], ...] = (
    ("Penguin School 📚", DeckColor.BLUE),
    ("Trending rn 🔥", DeckColor.RED),
)


class CollectionService:
    def __init__(self, deck_service: Annotated[DeckService, Depends()]) -> None:
        self.deck_service = deck_service

    async def get_featured(self) -> list[FeaturedCollection]:
        """The most liked decks of each featured color."""
        collections: list[FeaturedCollection] = []
        for name, color in FEATURED_COLLECTIONS:
            decks = await self.deck_service.get_decks(
                color=color, most_liked=True, limit=settings.featured_limit
            )
            collections.append(
                FeaturedCollection(
                    name=name,
                    color=color,
                    decks=[
                        DeckSummary.from_deck(deck, likes_count=likes_count)
                        for deck, likes_count in decks
                    ],
                )
            )
        return collections
