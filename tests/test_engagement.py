"""Likes and session-deduplicated views."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from conftest import full_composition
from deckshare.core.enums import DeckColor
from deckshare.core.exceptions import NotFoundError, UnauthenticatedError
from deckshare.models.card import Card
from deckshare.models.deck import Deck
from deckshare.models.deck_card import DeckCard
from deckshare.models.like import Like
from deckshare.models.user import User
from deckshare.services.deck import DeckService
from deckshare.services.engagement import EngagementService


@pytest.fixture
async def deck(session: AsyncSession, users: dict[str, User], catalog: list[Card]) -> Deck:
    deck = Deck(title="Chilly", color=DeckColor.BLUE, author_id=users["alice"].id)
    session.add(deck)
    await session.flush()
    session.add_all(
        DeckCard(deck_id=deck.id, card_id=entry["card_id"], quantity=entry["quantity"])
        for entry in full_composition(catalog)
    )
    await session.commit()
    return deck


async def test_toggle_like_twice(engagement_service: EngagementService, deck: Deck) -> None:
    assert await engagement_service.toggle_like(deck.id, "bob") == (True, 1)
    assert await engagement_service.has_liked(deck.id, "bob")

    assert await engagement_service.toggle_like(deck.id, "bob") == (False, 0)
    assert not await engagement_service.has_liked(deck.id, "bob")


async def test_likes_are_counted_per_user(
    engagement_service: EngagementService, deck: Deck
) -> None:
    await engagement_service.toggle_like(deck.id, "bob")
    liked, likes_count = await engagement_service.toggle_like(deck.id, "alice")

    assert liked is True
    assert likes_count == 2
    assert await engagement_service.count_likes(deck.id) == 2


async def test_like_requires_known_user(
    engagement_service: EngagementService, deck: Deck
) -> None:
    with pytest.raises(UnauthenticatedError):
        await engagement_service.toggle_like(deck.id, None)
    with pytest.raises(UnauthenticatedError):
        await engagement_service.toggle_like(deck.id, "nobody")


async def test_like_missing_deck(engagement_service: EngagementService, deck: Deck) -> None:
    with pytest.raises(NotFoundError):
        await engagement_service.toggle_like(404, "bob")


async def test_view_counted_once_per_session(deck_service: DeckService, deck: Deck) -> None:
    # A repeated session rolls back, which expires the fixture instance
    deck_id = deck.id

    viewed, _, _ = await deck_service.view_deck(deck_id, session_id="tab-1")
    assert viewed.views == 1

    viewed, _, _ = await deck_service.view_deck(deck_id, session_id="tab-1")
    assert viewed.views == 1

    viewed, _, _ = await deck_service.view_deck(deck_id, session_id="tab-2")
    assert viewed.views == 2


async def test_view_without_session_is_not_counted(deck_service: DeckService, deck: Deck) -> None:
    viewed, _, _ = await deck_service.view_deck(deck.id)
    assert viewed.views == 0


async def test_view_reports_liked(
    deck_service: DeckService, engagement_service: EngagementService, deck: Deck
) -> None:
    await engagement_service.toggle_like(deck.id, "bob")

    _, likes_count, liked = await deck_service.view_deck(deck.id, username="bob")
    assert (likes_count, liked) == (1, True)

    _, _, liked = await deck_service.view_deck(deck.id, username="alice")
    assert liked is False


async def test_like_endpoint(client: AsyncClient, deck: Deck) -> None:
    response = await client.post(f"/api/decks/{deck.id}/like", json={"username": "bob"})
    assert response.status_code == 200
    assert response.json()["data"] == {"liked": True, "likes_count": 1}

    response = await client.get(f"/api/decks/{deck.id}", headers={"x-username": "bob"})
    assert response.json()["data"]["liked"] is True
    assert response.json()["data"]["likes_count"] == 1

    response = await client.post(f"/api/decks/{deck.id}/like", json={"username": "bob"})
    assert response.json()["data"] == {"liked": False, "likes_count": 0}


async def test_like_endpoint_without_user(client: AsyncClient, deck: Deck) -> None:
    response = await client.post(f"/api/decks/{deck.id}/like", json={})
    assert response.status_code == 401


async def test_view_endpoint_dedupes_sessions(client: AsyncClient, deck: Deck) -> None:
    for _ in range(3):
        response = await client.get(f"/api/decks/{deck.id}", headers={"x-session-id": "s1"})
    assert response.json()["data"]["views"] == 1

    response = await client.get(f"/api/decks/{deck.id}", headers={"x-session-id": "s2"})
    assert response.json()["data"]["views"] == 2


async def test_like_inserted_concurrently_counts_as_liked(
    engagement_service: EngagementService,
    engine: AsyncEngine,
    session: AsyncSession,
    users: dict[str, User],
    deck: Deck,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # The losing insert rolls back, which expires the fixture instances
    deck_id, bob_id = deck.id, users["bob"].id

    async def liked_by_another_request(deck_id: int, user_id: int) -> None:
        async with AsyncSession(engine) as other:
            other.add(Like(user_id=user_id, deck_id=deck_id))
            await other.commit()

    monkeypatch.setattr(engagement_service, "find_like", liked_by_another_request)

    assert await engagement_service.toggle_like(deck_id, "bob") == (True, 1)

    result = await session.exec(
        select(Like).where(Like.deck_id == deck_id, Like.user_id == bob_id)
    )
    assert len(result.all()) == 1
