from typing import Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint

if TYPE_CHECKING:
    from .student import Student


class TransactionSource(str, Enum):
    MANUAL = "manual"
    FEED = "feed"
    FOOD = "food"
    SHOP = "shop"
    PET = "pet"


class PointTransaction(SQLModel, table=True):
    __tablename__ = "point_transactions"
    __table_args__ = (
        CheckConstraint("amount <> 0", name="ck_transaction_amount_nonzero"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    amount: int  # signed
    reason: Optional[str] = None
    source: TransactionSource = Field(default=TransactionSource.MANUAL)
    created_at: datetime = Field(default_factory=utcnow, index=True)

    student: "Student" = Relationship(back_populates="transactions")
