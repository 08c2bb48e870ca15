from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    db_url: str = "sqlite+aiosqlite:///./deckshare.db"
    db_echo: bool = False
    env: Literal["prod", "dev"] = "prod"
    cors_origins: list[str] = ["*"]

    # Moderator basic-auth credential
    # IMPORTANT: set in environment for production, moderation is disabled otherwise
    admin_username: str | None = None
    admin_password: str | None = None

    # Feed limits
    search_limit: int = 10
    featured_limit: int = 5

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


load_dotenv()
settings = Config()
