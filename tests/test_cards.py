import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from conftest import MODERATOR, full_composition
from deckshare.core.enums import CardColor
from deckshare.models.card import Card
from deckshare.models.user import User


async def test_list_cards_sorted_by_name(client: AsyncClient, catalog: list[Card]) -> None:
    response = await client.get("/api/cards/")

    assert response.status_code == 200
    names = [card["name"] for card in response.json()["data"]]
    assert names == sorted(name for name in names)
    assert len(names) == len(catalog)


async def test_create_card_requires_moderator(client: AsyncClient) -> None:
    response = await client.post("/api/cards/", json={"name": "Yeti", "color": "GREEN"})
    assert response.status_code == 401

    response = await client.post(
        "/api/cards/", json={"name": "Yeti", "color": "GREEN"}, auth=MODERATOR
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Yeti"


async def test_moderator_username_is_case_insensitive(client: AsyncClient) -> None:
    response = await client.post(
        "/api/cards/", json={"name": "Yeti", "color": "GREEN"}, auth=("ADMIN", MODERATOR[1])
    )
    assert response.status_code == 200


async def test_duplicate_card_name(client: AsyncClient, catalog: list[Card]) -> None:
    response = await client.post(
        "/api/cards/", json={"name": "snow fort", "color": "BLUE"}, auth=MODERATOR
    )
    assert response.status_code == 409


async def test_invalid_color(client: AsyncClient) -> None:
    response = await client.post(
        "/api/cards/", json={"name": "Yeti", "color": "PINK"}, auth=MODERATOR
    )
    assert response.status_code == 422
    assert response.json()["status"] == "error"


async def test_delete_unused_card(client: AsyncClient, catalog: list[Card]) -> None:
    unused = catalog[-1]

    response = await client.delete("/api/cards/", params={"id": unused.id}, auth=MODERATOR)
    assert response.status_code == 200

    response = await client.delete("/api/cards/", params={"id": unused.id}, auth=MODERATOR)
    assert response.status_code == 404


async def test_delete_card_used_in_a_deck(
    client: AsyncClient, users: dict[str, User], catalog: list[Card]
) -> None:
    await client.post(
        "/api/decks/",
        json={
            "title": "Chilly",
            "color": "BLUE",
            "username": "alice",
            "cards": full_composition(catalog),
        },
    )

    response = await client.delete("/api/cards/", params={"id": catalog[0].id}, auth=MODERATOR)

    assert response.status_code == 409


async def test_blank_card_name(client: AsyncClient) -> None:
    response = await client.post(
        "/api/cards/", json={"name": "   ", "color": "GREEN"}, auth=MODERATOR
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Card name required"

    response = await client.get("/api/cards/")
    assert response.json()["data"] == []


async def test_card_names_unique_regardless_of_case(session: AsyncSession) -> None:
    session.add(Card(name="Snow Fort", color=CardColor.BLUE))
    await session.commit()

    session.add(Card(name="SNOW FORT", color=CardColor.RED))
    with pytest.raises(IntegrityError):
        await session.commit()
    await session.rollback()
