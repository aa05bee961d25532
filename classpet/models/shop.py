from typing import Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint, UniqueConstraint

if TYPE_CHECKING:
    from .student import Student


class ShopItemType(str, Enum):
    PET = "pet"
    AVATAR_FRAME = "avatar_frame"
    BACKGROUND = "background"


RARITY_COMMON = 1
RARITY_RARE = 2
RARITY_EPIC = 3
RARITY_LEGENDARY = 4

RARITY_LABELS = {
    RARITY_COMMON: "Common",
    RARITY_RARE: "Rare",
    RARITY_EPIC: "Epic",
    RARITY_LEGENDARY: "Legendary",
}


class ShopItem(SQLModel, table=True):
    __tablename__ = "shop_items"
    __table_args__ = (
        CheckConstraint("price >= 1", name="ck_shop_item_price_positive"),
        CheckConstraint("rarity BETWEEN 1 AND 4", name="ck_shop_item_rarity_range"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    type: ShopItemType = Field(default=ShopItemType.PET)
    price: int = Field(default=100)
    asset_url: Optional[str] = None
    preview_emoji: Optional[str] = None
    rarity: int = Field(default=RARITY_COMMON)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def rarity_label(self) -> str:
        return RARITY_LABELS.get(self.rarity, "Unknown")


class StudentItem(SQLModel, table=True):
    __tablename__ = "student_items"
    __table_args__ = (
        UniqueConstraint("student_id", "shop_item_id", name="uq_student_item"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    shop_item_id: int = Field(foreign_key="shop_items.id", index=True)
    is_equipped: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    student: "Student" = Relationship(back_populates="owned_items")
    shop_item: "ShopItem" = Relationship()
