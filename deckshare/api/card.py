from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from deckshare.core.security import require_moderator
from deckshare.models.card import Card
from deckshare.schemas.card import CardCreate
from deckshare.schemas.common import APIResponse
from deckshare.services.card import CardService

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/")
async def get_cards(service: Annotated[CardService, Depends()]) -> APIResponse[Sequence[Card]]:
    cards = await service.get_cards()
    return APIResponse(data=cards)


@router.post("/", dependencies=[Depends(require_moderator)])
async def create_card(
    card: CardCreate, service: Annotated[CardService, Depends()]
) -> APIResponse[Card]:
    created_card = await service.create_card(card)
    return APIResponse(data=created_card, message="Card created successfully")


@router.delete("/", dependencies=[Depends(require_moderator)])
async def delete_card(
    card_id: Annotated[int, Query(alias="id", description="ID of the card to delete")],
    service: Annotated[CardService, Depends()],
) -> APIResponse[None]:
    await service.delete_card(card_id)
    return APIResponse(message="Card deleted successfully")
