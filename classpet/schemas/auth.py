from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8)


class LoginForm(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class LoginResponse(BaseModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
