from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship

if TYPE_CHECKING:
    from .classroom import Classroom
    from .pet import StudentPet
    from .point_transaction import PointTransaction
    from .shop import ShopItem, StudentItem
    from .food import StudentInventory


class Student(SQLModel, table=True):
    __tablename__ = "students"

    id: Optional[int] = Field(default=None, primary_key=True)
    classroom_id: int = Field(foreign_key="classrooms.id", index=True)
    name: str = Field(max_length=255)
    points_balance: int = Field(default=0)
    total_points_earned: int = Field(default=0)
    equipped_frame_id: Optional[int] = Field(default=None, foreign_key="shop_items.id")
    equipped_background_id: Optional[int] = Field(default=None, foreign_key="shop_items.id")
    created_at: datetime = Field(default_factory=utcnow)

    classroom: "Classroom" = Relationship(back_populates="students")
    pet: Optional["StudentPet"] = Relationship(
        back_populates="student",
        sa_relationship_kwargs={"uselist": False, "cascade": "all, delete-orphan"},
    )
    transactions: List["PointTransaction"] = Relationship(
        back_populates="student",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    owned_items: List["StudentItem"] = Relationship(
        back_populates="student",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    inventory: List["StudentInventory"] = Relationship(
        back_populates="student",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    equipped_frame: Optional["ShopItem"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Student.equipped_frame_id]"}
    )
    equipped_background: Optional["ShopItem"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Student.equipped_background_id]"}
    )

    def owns_item(self, shop_item_id: int) -> bool:
        return any(owned.shop_item_id == shop_item_id for owned in self.owned_items)

    def __repr__(self):
        return f"<Student id={self.id} {self.name} balance={self.points_balance}>"
