from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from classpet.models import TransactionSource
from classpet.schemas.student import StudentRead


class PointAdjustmentForm(BaseModel):
    amount: int  # negative deducts
    reason: Optional[str] = Field(default=None, max_length=255)

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("amount must not be zero")
        return v


class PointTransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    amount: int
    reason: Optional[str] = None
    source: TransactionSource
    created_at: datetime


class PointTransactionWithStudent(PointTransactionRead):
    student: StudentRead
