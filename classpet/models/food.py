from typing import Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint, UniqueConstraint

if TYPE_CHECKING:
    from .student import Student


class FoodRarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"


class PetFood(SQLModel, table=True):
    __tablename__ = "pet_foods"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    emoji: str = "🍖"
    image_url: Optional[str] = None
    hunger_restore: int = Field(default=20)
    happiness_boost: int = Field(default=10)
    price: int = Field(default=5)
    rarity: FoodRarity = Field(default=FoodRarity.COMMON)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class StudentInventory(SQLModel, table=True):
    __tablename__ = "student_inventory"
    __table_args__ = (
        UniqueConstraint("student_id", "pet_food_id", name="uq_inventory_student_food"),
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_nonneg"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    pet_food_id: int = Field(foreign_key="pet_foods.id", index=True)
    quantity: int = Field(default=0)
    updated_at: datetime = Field(default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow})

    student: "Student" = Relationship(back_populates="inventory")
    pet_food: "PetFood" = Relationship()
