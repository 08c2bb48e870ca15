from datetime import datetime

import sqlmodel

from deckshare.utils.misc import get_utc_now

from ._base import BaseModel


class User(BaseModel, table=True):
    __tablename__: str = "users"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    username: str = sqlmodel.Field(max_length=50, unique=True, index=True)
    password_hash: str
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )
