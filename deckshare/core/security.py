from __future__ import annotations

import secrets
from typing import Annotated, Protocol

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from loguru import logger
from passlib.context import CryptContext

from deckshare.core.config import settings
from deckshare.core.exceptions import UnauthenticatedError

# HTTP Basic scheme for moderator endpoints, optional so regular users pass through
basic_scheme = HTTPBasic(auto_error=False, realm="Admin Area")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


class ModeratorAuthorizer(Protocol):
    def is_moderator(self, credentials: HTTPBasicCredentials | None) -> bool: ...


class SharedSecretAuthorizer:
    """Checks basic-auth credentials against the single shared moderator secret.

    The username is compared case-insensitively, the password exactly. With no
    secret configured nobody is a moderator.
    """

    def __init__(self, username: str | None, password: str | None) -> None:
        self.username = username
        self.password = password

    def is_moderator(self, credentials: HTTPBasicCredentials | None) -> bool:
        if credentials is None or not self.username or not self.password:
            return False

        username_ok = secrets.compare_digest(
            credentials.username.strip().lower().encode("utf-8"),
            self.username.lower().encode("utf-8"),
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode("utf-8"), self.password.encode("utf-8")
        )
        if not (username_ok and password_ok):
            logger.warning(f"Rejected moderator credentials for {credentials.username!r}")
            return False
        return True


def get_moderator_authorizer() -> ModeratorAuthorizer:
    return SharedSecretAuthorizer(settings.admin_username, settings.admin_password)


def is_moderator(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
    authorizer: Annotated[ModeratorAuthorizer, Depends(get_moderator_authorizer)],
) -> bool:
    """Whether the request carries valid moderator credentials; never raises."""
    return authorizer.is_moderator(credentials)


def require_moderator(moderator: Annotated[bool, Depends(is_moderator)]) -> None:
    if not moderator:
        raise UnauthenticatedError("Unauthorized", headers={"WWW-Authenticate": "Basic"})
