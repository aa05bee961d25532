from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from classpet.schemas.student import RankedStudent, StudentWithPet


class ClassroomForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    theme: Optional[str] = None


class ClassroomUpdateForm(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    theme: Optional[str] = None


class ClassroomRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_id: int
    name: str
    theme: Optional[str] = None
    public_slug: str
    created_at: datetime


class ClassroomWithCount(ClassroomRead):
    students_count: int


class ClassroomDetail(ClassroomRead):
    students: list[StudentWithPet]


class PublicClassroom(ClassroomRead):
    students: list[RankedStudent]
