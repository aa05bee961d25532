import uuid
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship

if TYPE_CHECKING:
    from .user import User
    from .student import Student


def new_public_slug() -> str:
    return str(uuid.uuid4())


class Classroom(SQLModel, table=True):
    __tablename__ = "classrooms"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: int = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=255)
    theme: Optional[str] = None
    public_slug: str = Field(default_factory=new_public_slug, unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)

    teacher: "User" = Relationship(back_populates="classrooms")
    students: List["Student"] = Relationship(
        back_populates="classroom",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Student.id"},
    )

    @property
    def students_count(self) -> int:
        return len(self.students)
