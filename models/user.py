# Pydantic моделі для даних користувача

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.config import settings


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserCreate(BaseModel):
    name: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=settings.MIN_PASSWORD_LENGTH)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class UserPublic(BaseModel):
    id: str
    name: str
    email: EmailStr
    created_at: datetime | None = None


class UserInDB(UserPublic):
    password_hash: str

    def public(self) -> UserPublic:
        return UserPublic(**self.model_dump(exclude={"password_hash"}))


class SessionResponse(BaseModel):
    status: bool = True
    user: UserPublic


class CheckUserResponse(BaseModel):
    status: bool
    user: UserPublic | None = None
    reason: str | None = None
