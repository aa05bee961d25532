from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from classpet.utils import utcnow
from sqlmodel import Field, SQLModel, Relationship

from classpet.security import hash_password, verify_password

if TYPE_CHECKING:
    from .classroom import Classroom


class User(SQLModel, table=True):
    """A teacher account. Students are plain records, not users."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)

    classrooms: List["Classroom"] = Relationship(
        back_populates="teacher",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    def set_password(self, password: str):
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def __repr__(self):
        return f"<User id={self.id} {self.email}>"
