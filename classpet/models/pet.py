from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint

if TYPE_CHECKING:
    from .student import Student
    from .food import PetFood


class PetRarity(str, Enum):
    NORMAL = "normal"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


RARITY_RANK = {
    PetRarity.NORMAL: 0,
    PetRarity.RARE: 1,
    PetRarity.EPIC: 2,
    PetRarity.LEGENDARY: 3,
}


class PetMood(str, Enum):
    HAPPY = "happy"
    NORMAL = "normal"
    HUNGRY = "hungry"
    SAD = "sad"


class PetType(SQLModel, table=True):
    __tablename__ = "pet_types"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_pet_type_price_nonneg"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    base_asset_url: Optional[str] = None
    max_level: int = Field(default=10)
    rarity: PetRarity = Field(default=PetRarity.NORMAL)
    price: int = Field(default=0)  # 0 = free starter
    is_default: bool = False
    is_active: bool = True
    image_idle: Optional[str] = None
    image_happy: Optional[str] = None
    image_eating: Optional[str] = None
    image_hungry: Optional[str] = None
    image_sleeping: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    pets: List["StudentPet"] = Relationship(back_populates="type")


class StudentPet(SQLModel, table=True):
    __tablename__ = "student_pets"
    __table_args__ = (
        CheckConstraint("hunger_level BETWEEN 0 AND 100", name="ck_pet_hunger_range"),
        CheckConstraint("happiness_level BETWEEN 0 AND 100", name="ck_pet_happiness_range"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="students.id", unique=True, index=True)
    pet_type_id: int = Field(foreign_key="pet_types.id", index=True)
    nickname: Optional[str] = None
    level: int = Field(default=1)
    current_exp: int = Field(default=0)
    is_hungry: bool = False
    mood: PetMood = Field(default=PetMood.NORMAL)
    hunger_level: int = Field(default=100)
    happiness_level: int = Field(default=100)
    last_fed_at: Optional[datetime] = None
    last_played_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    student: "Student" = Relationship(back_populates="pet")
    type: "PetType" = Relationship(back_populates="pets")
    feed_logs: List["PetFeedLog"] = Relationship(
        back_populates="student_pet",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class PetFeedLog(SQLModel, table=True):
    __tablename__ = "pet_feed_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    student_pet_id: int = Field(foreign_key="student_pets.id", index=True)
    pet_food_id: int = Field(foreign_key="pet_foods.id")
    hunger_before: int
    hunger_after: int
    happiness_before: int
    happiness_after: int
    created_at: datetime = Field(default_factory=utcnow, index=True)

    student_pet: "StudentPet" = Relationship(back_populates="feed_logs")
    pet_food: "PetFood" = Relationship()
