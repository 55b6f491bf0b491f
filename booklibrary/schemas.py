from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Users
class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, max_length=128)


class UserLogin(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"


class UserPublic(CamelModel):
    id: int
    username: str


# Books
class BookCreate(CamelModel):
    name: str
    isbn: str
    description: str
    page_count: int
    author: str


class BookUpdate(CamelModel):
    name: str | None = None
    isbn: str | None = None
    description: str | None = None
    page_count: int | None = None
    author: str | None = None


class BookOut(CamelModel):
    id: int
    name: str
    isbn: str
    description: str
    page_count: int
    author: str
    owner_id: int
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
