from __future__ import annotations

from typing import Any, Dict, List

from sqlmodel import Session

from classpet.models import FoodRarity, PetFood, PetRarity, PetType, ShopItem, ShopItemType
from classpet.models.shop import RARITY_COMMON, RARITY_EPIC, RARITY_LEGENDARY, RARITY_RARE

from seeds.utils import get_or_create


DEFAULT_PET_TYPES: List[Dict[str, Any]] = [
    {"name": "Puppy", "base_asset_url": "🐕"},
    {"name": "Kitten", "base_asset_url": "🐱"},
    {"name": "Bunny", "base_asset_url": "🐰"},
    {"name": "Teddy Bear", "base_asset_url": "🐻"},
    {"name": "Fox Cub", "base_asset_url": "🦊"},
]

SHOP_PET_TYPES: List[Dict[str, Any]] = [
    {"name": "Unicorn", "base_asset_url": "🦄", "rarity": PetRarity.RARE, "price": 50, "max_level": 15},
    {"name": "Panda", "base_asset_url": "🐼", "rarity": PetRarity.RARE, "price": 50, "max_level": 15},
    {"name": "Wolf Pup", "base_asset_url": "🐺", "rarity": PetRarity.RARE, "price": 50, "max_level": 15},
    {"name": "Baby Dragon", "base_asset_url": "🐉", "rarity": PetRarity.EPIC, "price": 100, "max_level": 20},
    {"name": "Phoenix", "base_asset_url": "🔥", "rarity": PetRarity.EPIC, "price": 100, "max_level": 20},
    {"name": "Star Spirit", "base_asset_url": "🌟", "rarity": PetRarity.LEGENDARY, "price": 200, "max_level": 25},
]

PET_FOODS: List[Dict[str, Any]] = [
    {"name": "Cookie", "emoji": "🍪", "hunger_restore": 15, "happiness_boost": 5, "price": 3},
    {"name": "Carrot", "emoji": "🥕", "hunger_restore": 20, "happiness_boost": 5, "price": 5},
    {"name": "Apple", "emoji": "🍎", "hunger_restore": 20, "happiness_boost": 10, "price": 5},
    {"name": "Bone", "emoji": "🦴", "hunger_restore": 25, "happiness_boost": 15, "price": 8},
    {"name": "Roast Meat", "emoji": "🍖", "hunger_restore": 40, "happiness_boost": 20, "price": 15, "rarity": FoodRarity.RARE},
    {"name": "Pizza", "emoji": "🍕", "hunger_restore": 35, "happiness_boost": 25, "price": 15, "rarity": FoodRarity.RARE},
    {"name": "Ice Cream", "emoji": "🍦", "hunger_restore": 20, "happiness_boost": 35, "price": 12, "rarity": FoodRarity.RARE},
    {"name": "Birthday Cake", "emoji": "🎂", "hunger_restore": 50, "happiness_boost": 50, "price": 30, "rarity": FoodRarity.EPIC},
    {"name": "Rainbow Candy", "emoji": "🌈", "hunger_restore": 30, "happiness_boost": 60, "price": 25, "rarity": FoodRarity.EPIC},
]

SHOP_ITEMS: List[Dict[str, Any]] = [
    {"name": "Unicorn", "type": ShopItemType.PET, "price": 50, "preview_emoji": "🦄", "rarity": RARITY_RARE},
    {"name": "Panda", "type": ShopItemType.PET, "price": 50, "preview_emoji": "🐼", "rarity": RARITY_RARE},
    {"name": "Baby Dragon", "type": ShopItemType.PET, "price": 100, "preview_emoji": "🐉", "rarity": RARITY_EPIC},
    {"name": "Gold Star Frame", "type": ShopItemType.AVATAR_FRAME, "price": 30, "preview_emoji": "⭐", "rarity": RARITY_COMMON},
    {"name": "Heart Frame", "type": ShopItemType.AVATAR_FRAME, "price": 40, "preview_emoji": "💖", "rarity": RARITY_COMMON},
    {"name": "Rainbow Frame", "type": ShopItemType.AVATAR_FRAME, "price": 80, "preview_emoji": "🌈", "rarity": RARITY_RARE},
    {"name": "Crown Frame", "type": ShopItemType.AVATAR_FRAME, "price": 300, "preview_emoji": "👑", "rarity": RARITY_LEGENDARY},
    {"name": "Meadow", "type": ShopItemType.BACKGROUND, "price": 30, "preview_emoji": "🌳", "rarity": RARITY_COMMON},
    {"name": "Beach", "type": ShopItemType.BACKGROUND, "price": 60, "preview_emoji": "🏖️", "rarity": RARITY_RARE},
    {"name": "Outer Space", "type": ShopItemType.BACKGROUND, "price": 150, "preview_emoji": "🌌", "rarity": RARITY_EPIC},
]


def seed_pet_types(session: Session) -> Dict[str, PetType]:
    pet_types = {}
    for data in DEFAULT_PET_TYPES:
        pet_type, _ = get_or_create(session, PetType, name=data["name"], defaults={**data, "is_default": True, "price": 0})
        pet_types[pet_type.name] = pet_type
    for data in SHOP_PET_TYPES:
        pet_type, _ = get_or_create(session, PetType, name=data["name"], defaults=data)
        pet_types[pet_type.name] = pet_type
    session.commit()
    return pet_types


def seed_pet_foods(session: Session) -> Dict[str, PetFood]:
    foods = {}
    for data in PET_FOODS:
        food, _ = get_or_create(session, PetFood, name=data["name"], defaults=data)
        foods[food.name] = food
    session.commit()
    return foods


def seed_shop_items(session: Session) -> Dict[str, ShopItem]:
    items = {}
    for data in SHOP_ITEMS:
        item, _ = get_or_create(session, ShopItem, name=data["name"], type=data["type"], defaults=data)
        items[item.name] = item
    session.commit()
    return items
