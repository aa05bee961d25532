from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from classpet.models import ShopItemType


class ShopItemForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    type: ShopItemType
    price: int = Field(ge=1)
    preview_emoji: str = Field(min_length=1, max_length=10)
    rarity: int = Field(ge=1, le=4)
    asset_url: Optional[str] = None
    is_active: bool = True


class ShopItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    type: ShopItemType
    price: int
    asset_url: Optional[str] = None
    preview_emoji: Optional[str] = None
    rarity: int
    rarity_label: str
    is_active: bool


class StudentItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    shop_item_id: int
    is_equipped: bool
    created_at: datetime
    shop_item: ShopItemRead


class StudentItems(BaseModel):
    items: list[StudentItemRead]
    equipped_frame_id: Optional[int] = None
    equipped_background_id: Optional[int] = None


class ShopItemChoice(BaseModel):
    shop_item_id: int


class UnequipForm(BaseModel):
    type: Literal["avatar_frame", "background"]


class PurchaseResult(BaseModel):
    message: str
    item: ShopItemRead
    new_balance: int
