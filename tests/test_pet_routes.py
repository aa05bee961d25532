import pytest
from httpx import AsyncClient
from sqlmodel import Session, select

from classpet.models import PetFeedLog, PetFood, PointTransaction, StudentInventory, TransactionSource
from classpet.services.inventory import add_food
from tests.conftest import make_student


# --- Pet type catalogue ---

@pytest.mark.asyncio
async def test_pet_type_crud(client: AsyncClient, headers: dict):
    response = await client.post(
        "/api/pet-types",
        json={"name": "Phoenix", "rarity": "epic", "price": 100, "max_level": 20, "base_asset_url": "🔥"},
        headers=headers,
    )
    assert response.status_code == 201
    pet_type_id = response.json()["id"]

    response = await client.put(
        f"/api/pet-types/{pet_type_id}",
        json={"name": "Phoenix", "rarity": "epic", "price": 120, "max_level": 20},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["price"] == 120

    response = await client.get("/api/pet-types", headers=headers)
    assert [t["name"] for t in response.json()] == ["Phoenix"]

    response = await client.delete(f"/api/pet-types/{pet_type_id}", headers=headers)
    assert response.status_code == 200
    response = await client.get(f"/api/pet-types/{pet_type_id}", headers=headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pet_type_names_are_unique(client: AsyncClient, headers: dict, puppy):
    response = await client.post("/api/pet-types", json={"name": "Puppy"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_pet_type_in_use_cannot_be_deleted(client: AsyncClient, headers: dict, student, puppy):
    response = await client.delete(f"/api/pet-types/{puppy.id}", headers=headers)
    assert response.status_code == 400
    assert "pets are using it" in response.json()["detail"]


@pytest.mark.asyncio
async def test_pet_type_lists(client: AsyncClient, headers: dict, puppy, unicorn):
    response = await client.get("/api/pet-types-default", headers=headers)
    assert [t["name"] for t in response.json()] == ["Puppy"]

    response = await client.get("/api/pet-types-shop", headers=headers)
    assert [t["name"] for t in response.json()] == ["Unicorn"]


@pytest.mark.asyncio
async def test_pet_types_require_auth(client: AsyncClient):
    response = await client.get("/api/pet-types")
    assert response.status_code == 401


# --- Food and inventory ---

@pytest.mark.asyncio
async def test_list_foods_hides_inactive(session: Session, client: AsyncClient, headers: dict, cookie):
    session.add(PetFood(name="Old Bread", price=1, is_active=False))
    session.commit()
    response = await client.get("/api/pet-foods", headers=headers)
    assert [f["name"] for f in response.json()] == ["Cookie"]


@pytest.mark.asyncio
async def test_buy_food(session: Session, client: AsyncClient, headers: dict, student, cookie):
    response = await client.post(
        f"/api/students/{student.id}/buy-food",
        json={"pet_food_id": cookie.id, "quantity": 3},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["new_balance"] == 91
    assert body["inventory"]["quantity"] == 3

    # Buying again stacks onto the same row
    await client.post(f"/api/students/{student.id}/buy-food", json={"pet_food_id": cookie.id, "quantity": 2}, headers=headers)
    response = await client.get(f"/api/students/{student.id}/inventory", headers=headers)
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["quantity"] == 5
    assert rows[0]["pet_food"]["name"] == "Cookie"

    sources = session.exec(select(PointTransaction.source)).all()
    assert sources == [TransactionSource.FOOD, TransactionSource.FOOD]


@pytest.mark.asyncio
async def test_buy_food_insufficient_coins(client: AsyncClient, headers: dict, session: Session, classroom, cookie):
    poor = make_student(session, classroom, "Ben", balance=5)
    response = await client.post(
        f"/api/students/{poor.id}/buy-food",
        json={"pet_food_id": cookie.id, "quantity": 2},
        headers=headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["required"] == 6
    assert body["balance"] == 5
    assert session.exec(select(StudentInventory)).all() == []


@pytest.mark.asyncio
async def test_buy_food_quantity_range(client: AsyncClient, headers: dict, student, cookie):
    response = await client.post(
        f"/api/students/{student.id}/buy-food",
        json={"pet_food_id": cookie.id, "quantity": 11},
        headers=headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_feed_pet_from_inventory(session: Session, client: AsyncClient, headers: dict, classroom, puppy, cookie):
    student = make_student(session, classroom, pet_type=puppy, hunger_level=10, happiness_level=90)
    add_food(session, student, cookie, 1)
    session.commit()

    response = await client.post(f"/api/students/{student.id}/feed-pet", json={"pet_food_id": cookie.id}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {"hunger_level": 25, "happiness_level": 95, "mood": "normal"}
    assert body["pet"]["is_hungry"] is True
    assert "Cookie" in body["message"]

    # The last one was eaten, so the bag row is gone
    assert session.exec(select(StudentInventory)).all() == []
    log = session.exec(select(PetFeedLog)).one()
    assert (log.hunger_before, log.hunger_after) == (10, 25)

    response = await client.post(f"/api/students/{student.id}/feed-pet", json={"pet_food_id": cookie.id}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_feed_pet_caps_stats(session: Session, client: AsyncClient, headers: dict, student, cookie):
    add_food(session, student, cookie, 1)
    session.commit()
    response = await client.post(f"/api/students/{student.id}/feed-pet", json={"pet_food_id": cookie.id}, headers=headers)
    assert response.json()["stats"]["hunger_level"] == 100
    assert response.json()["stats"]["mood"] == "happy"


@pytest.mark.asyncio
async def test_feed_pet_without_pet(session: Session, client: AsyncClient, headers: dict, classroom, cookie):
    student = make_student(session, classroom, "Ben")
    response = await client.post(f"/api/students/{student.id}/feed-pet", json={"pet_food_id": cookie.id}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_pet_details_refreshes_mood(session: Session, client: AsyncClient, headers: dict, classroom, puppy, cookie):
    student = make_student(session, classroom, pet_type=puppy, hunger_level=15, happiness_level=90)
    add_food(session, student, cookie, 2)
    session.commit()

    response = await client.get(f"/api/students/{student.id}/pet-details", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["pet"]["mood"] == "hungry"
    assert body["inventory"][0]["quantity"] == 2


@pytest.mark.asyncio
async def test_pet_details_without_pet(session: Session, client: AsyncClient, headers: dict, classroom):
    student = make_student(session, classroom, "Ben")
    response = await client.get(f"/api/students/{student.id}/pet-details", headers=headers)
    assert response.status_code == 404


# --- Buying pets and feeding for EXP ---

@pytest.mark.asyncio
async def test_buy_pet(session: Session, client: AsyncClient, headers: dict, student, unicorn):
    response = await client.post(f"/api/students/{student.id}/buy-pet", json={"pet_type_id": unicorn.id}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["new_balance"] == 50
    assert body["pet"]["pet_type_id"] == unicorn.id
    assert body["pet"]["mood"] == "happy"
    assert body["pet"]["level"] == 1

    response = await client.post(f"/api/students/{student.id}/buy-pet", json={"pet_type_id": unicorn.id}, headers=headers)
    assert response.status_code == 400
    entry = session.exec(select(PointTransaction)).one()
    assert entry.source == TransactionSource.PET


@pytest.mark.asyncio
async def test_free_pet_is_not_for_sale(client: AsyncClient, headers: dict, student, puppy):
    response = await client.post(f"/api/students/{student.id}/buy-pet", json={"pet_type_id": puppy.id}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_feed_for_exp_route(client: AsyncClient, headers: dict, student):
    response = await client.post(f"/api/students/{student.id}/feed", json={"food_amount": 3}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["exp_gained"] == 150
    assert body["leveled_up"] is True
    assert body["new_level"] == 2
    assert body["student"]["points_balance"] == 70
    assert body["student"]["pet"]["current_exp"] == 50


@pytest.mark.asyncio
async def test_feed_for_exp_route_validation(client: AsyncClient, headers: dict, student):
    response = await client.post(f"/api/students/{student.id}/feed", json={"food_amount": 11}, headers=headers)
    assert response.status_code == 422
    response = await client.post(f"/api/students/{student.id}/feed", json={"food_amount": 0}, headers=headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_feed_for_exp_route_insufficient(client: AsyncClient, headers: dict, session: Session, classroom, puppy):
    student = make_student(session, classroom, balance=5, pet_type=puppy)
    response = await client.post(f"/api/students/{student.id}/feed", json={"food_amount": 1}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Not enough coins")
    assert response.json()["required"] == 10
    assert response.json()["current"] == 5
