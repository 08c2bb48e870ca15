from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    username: str | None = None
    content: str
    parent_id: int | None = None


class CommentDelete(BaseModel):
    username: str | None = None


class CommentAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    deck_id: int
    parent_id: int | None
    created_at: datetime
    user: CommentAuthor


class CommentThread(CommentRead):
    replies: list[CommentRead] = Field(default_factory=list)


class CommentDeck(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str


class ModerationComment(CommentRead):
    deck: CommentDeck
