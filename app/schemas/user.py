"""Author and viewer request and response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.configs.settings import MAX_USERNAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class AuthorRegister(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    bio: str = Field(default="", max_length=2000)
    email: EmailStr
    username: str = Field(min_length=MIN_USERNAME_LENGTH, max_length=50)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class AuthorUpdate(BaseModel):
    """Partial author profile update. `imageFile` may be `null` to clear it."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = Field(default=None, max_length=2000)
    image_file: UUID | None = Field(default=None, alias="imageFile")


class AuthorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    bio: str
    email: str
    username: str
    image_file: UUID | None = Field(default=None, alias="imageFile")
    comments: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")


class ViewerRegister(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    username: str = Field(
        min_length=MIN_USERNAME_LENGTH,
        max_length=MAX_USERNAME_LENGTH,
        pattern=USERNAME_PATTERN,
    )
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class ViewerUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    username: str | None = Field(
        default=None,
        min_length=MIN_USERNAME_LENGTH,
        max_length=MAX_USERNAME_LENGTH,
        pattern=USERNAME_PATTERN,
    )


class ViewerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    username: str
    comments: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")


class PasswordConfirm(BaseModel):
    password: str


class PasswordChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword", min_length=MIN_PASSWORD_LENGTH)
