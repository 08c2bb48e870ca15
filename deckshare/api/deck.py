from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, Query

from deckshare.core.security import is_moderator
from deckshare.schemas.common import APIResponse
from deckshare.schemas.deck import (
    DeckCreate,
    DeckDetail,
    DeckImportResult,
    DeckSearchResult,
    DeckSummary,
    DeckUpdate,
    LikeToggleResult,
    PortableDeck,
    UsernameBody,
)
from deckshare.services.deck import DeckService
from deckshare.services.engagement import EngagementService

router = APIRouter(prefix="/decks", tags=["decks"])


@router.get("/")
async def get_decks(service: Annotated[DeckService, Depends()]) -> APIResponse[list[DeckSummary]]:
    decks = await service.get_decks()
    return APIResponse(
        data=[DeckSummary.from_deck(deck, likes_count=likes_count) for deck, likes_count in decks]
    )


@router.post("/")
async def create_deck(
    deck: DeckCreate, service: Annotated[DeckService, Depends()]
) -> APIResponse[DeckDetail]:
    created_deck = await service.create_deck(deck)
    return APIResponse(data=DeckDetail.from_deck(created_deck), message="Deck created successfully")


@router.get("/search")
async def search_decks(
    service: Annotated[DeckService, Depends()],
    q: Annotated[str, Query(description="Text to look for in titles and descriptions")] = "",
) -> APIResponse[list[DeckSearchResult]]:
    decks = await service.search_decks(q)
    return APIResponse(data=[DeckSearchResult.model_validate(deck) for deck in decks])


@router.post("/import")
async def import_deck(
    payload: Annotated[Any, Body(description="Portable deck copied from the game client")],
    service: Annotated[DeckService, Depends()],
) -> APIResponse[DeckImportResult]:
    result = await service.import_deck(payload)
    message = (
        f"Some cards could not be found: {', '.join(result.not_found_cards)}"
        if result.not_found_cards
        else None
    )
    return APIResponse(data=result, message=message)


@router.get("/{deck_id}")
async def get_deck(
    deck_id: int,
    service: Annotated[DeckService, Depends()],
    x_session_id: Annotated[str | None, Header(max_length=64)] = None,
    x_username: Annotated[str | None, Header()] = None,
) -> APIResponse[DeckDetail]:
    deck, likes_count, liked = await service.view_deck(
        deck_id, session_id=x_session_id, username=x_username
    )
    return APIResponse(data=DeckDetail.from_deck(deck, likes_count=likes_count, liked=liked))


@router.put("/{deck_id}")
async def update_deck(
    deck_id: int,
    deck: DeckUpdate,
    service: Annotated[DeckService, Depends()],
    engagement_service: Annotated[EngagementService, Depends()],
) -> APIResponse[DeckDetail]:
    updated_deck = await service.update_deck(deck_id, deck)
    likes_count = await engagement_service.count_likes(deck_id)
    return APIResponse(
        data=DeckDetail.from_deck(updated_deck, likes_count=likes_count),
        message="Deck updated successfully",
    )


@router.delete("/{deck_id}")
async def delete_deck(
    deck_id: int,
    service: Annotated[DeckService, Depends()],
    moderator: Annotated[bool, Depends(is_moderator)],
    body: UsernameBody | None = None,
) -> APIResponse[None]:
    await service.delete_deck(
        deck_id, username=body.username if body else None, is_moderator=moderator
    )
    return APIResponse(message="Deck deleted successfully")


@router.post("/{deck_id}/export")
async def export_deck(
    deck_id: int, body: UsernameBody, service: Annotated[DeckService, Depends()]
) -> PortableDeck:
    """Portable deck for the clipboard, returned bare so it can be pasted as is."""
    return await service.export_deck(deck_id, body.username)


@router.post("/{deck_id}/like")
async def toggle_like(
    deck_id: int, body: UsernameBody, service: Annotated[EngagementService, Depends()]
) -> APIResponse[LikeToggleResult]:
    liked, likes_count = await service.toggle_like(deck_id, body.username)
    return APIResponse(data=LikeToggleResult(liked=liked, likes_count=likes_count))
