"""Skema autentikasi: login, verifikasi token dan pengguna."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRole(str, Enum):
    TEACHER = "teacher"
    ADMIN = "admin"
    STAFF = "staff"


class User(BaseModel):
    """Pengguna tersimpan (termasuk hash kata sandi)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole = UserRole.STAFF
    teacher_id: int | None = None
    password_hash: str = ""


class UserPublic(BaseModel):
    """Data pengguna yang aman dikirim ke client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole
    teacher_id: int | None = None


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: UserRole = UserRole.STAFF
    teacher_id: int | None = None


class LoginRequest(BaseModel):
    email: EmailStr = Field(description="Email pengguna")
    password: str = Field(min_length=1, description="Kata sandi")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class VerifyRequest(BaseModel):
    token: str = Field(min_length=1)


class TokenUser(BaseModel):
    user_id: str
    email: str
    role: str


class VerifyResponse(BaseModel):
    valid: bool = True
    user: TokenUser


class InitUsersResponse(BaseModel):
    message: str
    users: list[UserPublic] = []
