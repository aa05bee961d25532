from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from classpet.models import FoodRarity, PetMood, PetRarity


class PetTypeForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    base_asset_url: Optional[str] = None
    max_level: int = Field(default=10, ge=1, le=100)
    rarity: PetRarity = PetRarity.NORMAL
    price: int = Field(default=0, ge=0)
    is_default: bool = False
    is_active: bool = True
    image_idle: Optional[str] = None
    image_happy: Optional[str] = None
    image_eating: Optional[str] = None
    image_hungry: Optional[str] = None
    image_sleeping: Optional[str] = None


class PetTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    base_asset_url: Optional[str] = None
    max_level: int
    rarity: PetRarity
    price: int
    is_default: bool
    is_active: bool
    image_idle: Optional[str] = None
    image_happy: Optional[str] = None
    image_eating: Optional[str] = None
    image_hungry: Optional[str] = None
    image_sleeping: Optional[str] = None


class PetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    pet_type_id: int
    nickname: Optional[str] = None
    level: int
    current_exp: int
    is_hungry: bool
    mood: PetMood
    hunger_level: int
    happiness_level: int
    last_fed_at: Optional[datetime] = None
    type: Optional[PetTypeRead] = None


class AssignPetForm(BaseModel):
    pet_type_id: int
    nickname: Optional[str] = None


class PetTypeChoice(BaseModel):
    pet_type_id: int


class FeedForExpForm(BaseModel):
    food_amount: int = Field(ge=1, le=10)


class PetFoodRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    emoji: str
    image_url: Optional[str] = None
    hunger_restore: int
    happiness_boost: int
    price: int
    rarity: FoodRarity
    is_active: bool


class InventoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    pet_food_id: int
    quantity: int
    pet_food: PetFoodRead


class BuyFoodForm(BaseModel):
    pet_food_id: int
    quantity: int = Field(ge=1, le=10)


class FeedPetForm(BaseModel):
    pet_food_id: int


class PetStats(BaseModel):
    hunger_level: int
    happiness_level: int
    mood: PetMood


class FeedPetResult(BaseModel):
    message: str
    pet: PetRead
    stats: PetStats


class BuyFoodResult(BaseModel):
    message: str
    inventory: InventoryRead
    new_balance: int


class BuyPetResult(BaseModel):
    message: str
    pet: PetRead
    new_balance: int


class PetDetails(BaseModel):
    pet: PetRead
    inventory: list[InventoryRead]


class ChangePetResult(BaseModel):
    message: str
    pet: PetRead
