from typing import Annotated

from fastapi import APIRouter, Depends

from deckshare.schemas.comment import CommentCreate, CommentDelete, CommentRead, CommentThread
from deckshare.schemas.common import APIResponse
from deckshare.services.comment import CommentService

router = APIRouter(prefix="/decks", tags=["comments"])


@router.get("/{deck_id}/comments")
async def get_comments(
    deck_id: int, service: Annotated[CommentService, Depends()]
) -> APIResponse[list[CommentThread]]:
    threads = await service.get_thread(deck_id)
    return APIResponse(data=threads)


@router.post("/{deck_id}/comments")
async def post_comment(
    deck_id: int, comment: CommentCreate, service: Annotated[CommentService, Depends()]
) -> APIResponse[CommentRead]:
    created = await service.post_comment(deck_id, comment)
    return APIResponse(data=CommentRead.model_validate(created))


@router.delete("/{deck_id}/comments/{comment_id}")
async def delete_comment(
    deck_id: int,
    comment_id: int,
    body: CommentDelete,
    service: Annotated[CommentService, Depends()],
) -> APIResponse[None]:
    await service.delete_comment(deck_id, comment_id, body.username)
    return APIResponse(message="Comment deleted successfully")
