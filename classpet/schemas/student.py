from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from classpet.schemas.pet import PetRead
from classpet.schemas.shop import ShopItemRead


class StudentForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    pet_type_id: Optional[int] = None


class NewStudentForm(StudentForm):
    classroom_id: int


class StudentUpdateForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    classroom_id: Optional[int] = None


class ClassroomSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    theme: Optional[str] = None
    public_slug: str


class StudentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    classroom_id: int
    name: str
    points_balance: int
    total_points_earned: int
    equipped_frame_id: Optional[int] = None
    equipped_background_id: Optional[int] = None
    created_at: datetime


class StudentWithPet(StudentRead):
    pet: Optional[PetRead] = None
    equipped_frame: Optional[ShopItemRead] = None
    equipped_background: Optional[ShopItemRead] = None


class StudentWithClassroom(StudentWithPet):
    classroom: ClassroomSummary


class RankedStudent(StudentWithPet):
    rank: int = 0


class FeedForExpResult(BaseModel):
    student: StudentWithPet
    leveled_up: bool
    new_level: int
    previous_level: int
    exp_gained: int


class EquipResult(BaseModel):
    message: str
    student: StudentWithPet


class RosterImportResult(BaseModel):
    created: list[StudentWithPet]
    skipped: int
