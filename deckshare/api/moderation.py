from typing import Annotated

from fastapi import APIRouter, Depends

from deckshare.core.security import require_moderator
from deckshare.schemas.comment import ModerationComment
from deckshare.schemas.common import APIResponse
from deckshare.services.comment import CommentService

router = APIRouter(
    prefix="/comments", tags=["moderation"], dependencies=[Depends(require_moderator)]
)


@router.get("/")
async def get_all_comments(
    service: Annotated[CommentService, Depends()],
) -> APIResponse[list[ModerationComment]]:
    comments = await service.get_all_comments()
    return APIResponse(data=[ModerationComment.model_validate(comment) for comment in comments])


@router.delete("/{comment_id}")
async def force_delete_comment(
    comment_id: int, service: Annotated[CommentService, Depends()]
) -> APIResponse[None]:
    await service.force_delete_comment(comment_id)
    return APIResponse(message="Comment deleted successfully")
