from pydantic import BaseModel, ConfigDict, Field

from deckshare.core.enums import CardColor


class CardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: CardColor


class CardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: CardColor
