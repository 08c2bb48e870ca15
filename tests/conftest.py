from collections.abc import AsyncGenerator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from deckshare.core.db import get_db
from deckshare.core.enums import CardColor
from deckshare.core.security import (
    SharedSecretAuthorizer,
    get_moderator_authorizer,
    hash_password,
)
from deckshare.main import app
from deckshare.models.card import Card
from deckshare.models.user import User
from deckshare.services.card import CardService
from deckshare.services.comment import CommentService
from deckshare.services.deck import DeckService
from deckshare.services.engagement import EngagementService
from deckshare.services.user import UserService

MODERATOR = ("admin", "hunter2")

CATALOG: tuple[tuple[str, CardColor], ...] = (
    ("Fire Penguin", CardColor.RED),
    ("Lava Slide", CardColor.RED),
    ("Ember Sled", CardColor.RED),
    ("Hot Cocoa", CardColor.RED),
    ("Blaze of the North", CardColor.RED),
    ("Fisherman's Friend", CardColor.RED),
    ("OK Igloo", CardColor.RED),
    ("Ice Floe", CardColor.BLUE),
    ("Snow Fort", CardColor.BLUE),
    ("Frost Bite", CardColor.BLUE),
    ("Glacier Crab", CardColor.BLUE),
    ("Deep Blue", CardColor.BLUE),
    ("Tide Pool", CardColor.BLUE),
    ("Rusty Anchor", CardColor.GREY),
)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(
        engine, autocommit=False, autoflush=False, expire_on_commit=False
    ) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(
            engine, autocommit=False, autoflush=False, expire_on_commit=False
        ) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_moderator_authorizer] = lambda: SharedSecretAuthorizer(
        *MODERATOR
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def users(session: AsyncSession) -> dict[str, User]:
    created = {
        name: User(username=name, password_hash=hash_password("password"))
        for name in ("alice", "bob")
    }
    session.add_all(created.values())
    await session.commit()
    return created


@pytest.fixture
async def catalog(session: AsyncSession) -> list[Card]:
    cards = [Card(name=name, color=color) for name, color in CATALOG]
    session.add_all(cards)
    await session.commit()
    return cards


def full_composition(cards: Sequence[Card]) -> list[dict[str, int]]:
    """52 cards: four copies of the first thirteen catalog cards."""
    return [{"card_id": card.id, "quantity": 4} for card in cards[:13]]


@pytest.fixture
def user_service(session: AsyncSession) -> UserService:
    return UserService(session)


@pytest.fixture
def card_service(session: AsyncSession) -> CardService:
    return CardService(session)


@pytest.fixture
def engagement_service(session: AsyncSession, user_service: UserService) -> EngagementService:
    return EngagementService(session, user_service)


@pytest.fixture
def deck_service(
    session: AsyncSession,
    user_service: UserService,
    card_service: CardService,
    engagement_service: EngagementService,
) -> DeckService:
    return DeckService(session, user_service, card_service, engagement_service)


@pytest.fixture
def comment_service(session: AsyncSession, user_service: UserService) -> CommentService:
    return CommentService(session, user_service)
