from typing import Annotated

from fastapi import APIRouter, Depends

from deckshare.schemas.collection import FeaturedCollection
from deckshare.schemas.common import APIResponse
from deckshare.services.collection import CollectionService

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("/featured")
async def get_featured_collections(
    service: Annotated[CollectionService, Depends()],
) -> APIResponse[list[FeaturedCollection]]:
    collections = await service.get_featured()
    return APIResponse(data=collections)
