from typing import Literal
from uuid import UUID

from pydantic import BaseModel

Role = Literal["author", "viewer"]


class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"
    user_id: UUID
    role: Role


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    username: str | None = None
    user_id: UUID | None = None
    role: Role | None = None


class Principal(BaseModel):
    """The authenticated author or viewer behind a request."""

    id: UUID
    username: str
    role: Role

    @property
    def is_author(self) -> bool:
        return self.role == "author"
