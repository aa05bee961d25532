import pytest
from httpx import AsyncClient
from sqlmodel import Session, select

from classpet.models import PetRarity, PetType, PointTransaction, ShopItem, ShopItemType, StudentItem, TransactionSource
from tests.conftest import make_student


@pytest.mark.asyncio
async def test_shop_item_crud(client: AsyncClient, headers: dict):
    payload = {"name": "Beach", "type": "background", "price": 60, "preview_emoji": "🏖️", "rarity": 2}
    response = await client.post("/api/shop/items", json=payload, headers=headers)
    assert response.status_code == 201
    item = response.json()
    assert item["rarity_label"] == "Rare"

    response = await client.put(f"/api/shop/items/{item['id']}", json={**payload, "price": 75}, headers=headers)
    assert response.json()["price"] == 75

    response = await client.get("/api/shop/items", params={"type": "background"}, headers=headers)
    assert [i["name"] for i in response.json()] == ["Beach"]
    response = await client.get("/api/shop/items", params={"type": "avatar_frame"}, headers=headers)
    assert response.json() == []


@pytest.mark.asyncio
async def test_shop_item_validation(client: AsyncClient, headers: dict):
    payload = {"name": "Freebie", "type": "background", "price": 0, "preview_emoji": "🎁", "rarity": 1}
    response = await client.post("/api/shop/items", json=payload, headers=headers)
    assert response.status_code == 422
    response = await client.post("/api/shop/items", json={**payload, "price": 5, "rarity": 5}, headers=headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_priced_pet_types_sorted_by_rarity(session: Session, client: AsyncClient, headers: dict, puppy, unicorn):
    session.add(PetType(name="Phoenix", rarity=PetRarity.EPIC, price=100))
    session.add(PetType(name="Panda", rarity=PetRarity.RARE, price=40))
    session.commit()
    response = await client.get("/api/pet-types-shop", headers=headers)
    assert [t["name"] for t in response.json()] == ["Panda", "Unicorn", "Phoenix"]


@pytest.mark.asyncio
async def test_shop_pet_types_include_free_starters(client: AsyncClient, headers: dict, puppy, unicorn):
    response = await client.get("/api/shop/pet-types", headers=headers)
    assert response.status_code == 200
    assert [(t["name"], t["price"]) for t in response.json()] == [("Puppy", 0), ("Unicorn", 50)]


@pytest.mark.asyncio
async def test_change_back_to_free_starter(session: Session, client: AsyncClient, headers: dict, classroom, puppy, unicorn):
    student = make_student(session, classroom, pet_type=unicorn)
    response = await client.get("/api/shop/pet-types", headers=headers)
    starter = next(t for t in response.json() if t["price"] == 0)

    response = await client.post(f"/api/students/{student.id}/change-pet", json={"pet_type_id": starter["id"]}, headers=headers)
    assert response.status_code == 200
    assert response.json()["pet"]["pet_type_id"] == puppy.id


@pytest.mark.asyncio
async def test_purchase_and_equip_frame(session: Session, client: AsyncClient, headers: dict, student, frame):
    response = await client.post(f"/api/students/{student.id}/purchase", json={"shop_item_id": frame.id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["new_balance"] == 70

    entry = session.exec(select(PointTransaction)).one()
    assert entry.amount == -30
    assert entry.source == TransactionSource.SHOP

    response = await client.post(f"/api/students/{student.id}/purchase", json={"shop_item_id": frame.id}, headers=headers)
    assert response.status_code == 400

    response = await client.post(f"/api/students/{student.id}/equip", json={"shop_item_id": frame.id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["student"]["equipped_frame_id"] == frame.id
    assert response.json()["student"]["equipped_frame"]["name"] == "Gold Star Frame"

    response = await client.get(f"/api/students/{student.id}/items", headers=headers)
    body = response.json()
    assert body["equipped_frame_id"] == frame.id
    assert body["items"][0]["is_equipped"] is True

    response = await client.post(f"/api/students/{student.id}/unequip", json={"type": "avatar_frame"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["student"]["equipped_frame_id"] is None
    owned = session.exec(select(StudentItem)).one()
    assert owned.is_equipped is False


@pytest.mark.asyncio
async def test_purchase_insufficient_coins(session: Session, client: AsyncClient, headers: dict, classroom, frame):
    student = make_student(session, classroom, balance=10)
    response = await client.post(f"/api/students/{student.id}/purchase", json={"shop_item_id": frame.id}, headers=headers)
    assert response.status_code == 400
    assert response.json()["required"] == 30
    assert session.exec(select(StudentItem)).all() == []


@pytest.mark.asyncio
async def test_equip_requires_ownership(client: AsyncClient, headers: dict, student, frame):
    response = await client.post(f"/api/students/{student.id}/equip", json={"shop_item_id": frame.id}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unequip_rejects_pet_slot(client: AsyncClient, headers: dict, student):
    response = await client.post(f"/api/students/{student.id}/unequip", json={"type": "pet"}, headers=headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_equip_pet_item_switches_pet_type(session: Session, client: AsyncClient, headers: dict, student, unicorn):
    item = ShopItem(name="Unicorn", type=ShopItemType.PET, price=50, preview_emoji="🦄")
    session.add(item)
    session.commit()

    await client.post(f"/api/students/{student.id}/purchase", json={"shop_item_id": item.id}, headers=headers)
    response = await client.post(f"/api/students/{student.id}/equip", json={"shop_item_id": item.id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["student"]["pet"]["pet_type_id"] == unicorn.id


@pytest.mark.asyncio
async def test_delete_item_unequips_owners(session: Session, client: AsyncClient, headers: dict, student, frame):
    await client.post(f"/api/students/{student.id}/purchase", json={"shop_item_id": frame.id}, headers=headers)
    await client.post(f"/api/students/{student.id}/equip", json={"shop_item_id": frame.id}, headers=headers)

    response = await client.delete(f"/api/shop/items/{frame.id}", headers=headers)
    assert response.status_code == 200

    session.expire_all()
    assert session.exec(select(StudentItem)).all() == []
    assert student.equipped_frame_id is None


@pytest.mark.asyncio
async def test_change_pet(client: AsyncClient, headers: dict, student, unicorn):
    response = await client.post(f"/api/students/{student.id}/change-pet", json={"pet_type_id": unicorn.id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["pet"]["pet_type_id"] == unicorn.id


@pytest.mark.asyncio
async def test_change_pet_without_pet(session: Session, client: AsyncClient, headers: dict, classroom, unicorn):
    student = make_student(session, classroom, "Ben")
    response = await client.post(f"/api/students/{student.id}/change-pet", json={"pet_type_id": unicorn.id}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_item_keeps_omitted_fields(client: AsyncClient, headers: dict):
    payload = {
        "name": "Outer Space",
        "type": "background",
        "price": 150,
        "preview_emoji": "🌌",
        "rarity": 3,
        "asset_url": "/backgrounds/space.png",
    }
    response = await client.post("/api/shop/items", json=payload, headers=headers)
    item_id = response.json()["id"]

    update = {k: v for k, v in payload.items() if k != "asset_url"}
    response = await client.put(f"/api/shop/items/{item_id}", json={**update, "price": 120}, headers=headers)
    assert response.status_code == 200
    assert response.json()["price"] == 120
    assert response.json()["asset_url"] == "/backgrounds/space.png"
