"""Endpoint autentikasi: login, verifikasi token, pengguna saat ini dan pengguna bawaan."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from simaka.api.deps import get_current_user, get_store
from simaka.core.security import create_access_token, decode_access_token, hash_password, verify_password
from simaka.repositories.base import SchoolStore
from simaka.schemas.auth import (
    InitUsersResponse,
    LoginRequest,
    TokenResponse,
    TokenUser,
    User,
    UserCreate,
    UserPublic,
    UserRole,
    VerifyRequest,
    VerifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

DEFAULT_USERS = [
    UserCreate(
        email="admin@namira.sch.id",
        name="Administrator",
        password="admin12345",
        role=UserRole.ADMIN,
    ),
    UserCreate(
        email="teacher@namira.sch.id",
        name="Guru Contoh",
        password="teacher12345",
        role=UserRole.TEACHER,
    ),
]


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Masuk",
    responses={
        200: {"description": "Login berhasil, access_token dikembalikan"},
        401: {"description": "Email atau kata sandi salah"},
        422: {"description": "Data masukan tidak valid"},
    },
)
async def login(data: LoginRequest, store: SchoolStore = Depends(get_store)):
    """Autentikasi dengan **email** dan **kata sandi**; mengembalikan JWT."""
    user = await store.users.get_by_email(data.email)
    if user is None or not verify_password(data.password, user.password_hash):
        logger.warning("Login gagal untuk %s", data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email atau kata sandi salah",
        )
    token = create_access_token(
        subject=user.id,
        extra={"email": user.email, "role": user.role.value},
    )
    return TokenResponse(access_token=token, user=UserPublic.model_validate(user))


@router.post(
    "/verify",
    response_model=VerifyResponse,
    summary="Verifikasi token",
    responses={401: {"description": "Token tidak valid atau kedaluwarsa"}},
)
async def verify(data: VerifyRequest):
    payload = decode_access_token(data.token)
    if not payload or "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token tidak valid atau kedaluwarsa",
        )
    return VerifyResponse(
        user=TokenUser(
            user_id=str(payload["sub"]),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
        )
    )


@router.get("/me", response_model=UserPublic, summary="Pengguna saat ini")
async def get_me(current_user: User = Depends(get_current_user)):
    """**Wajib:** header `Authorization: Bearer <access_token>`."""
    return UserPublic.model_validate(current_user)


@router.post(
    "/init-users",
    response_model=InitUsersResponse,
    summary="Membuat pengguna bawaan",
)
async def init_users(store: SchoolStore = Depends(get_store)):
    """Membuat admin dan guru bawaan bila belum ada pengguna sama sekali."""
    if await store.users.count() > 0:
        return InitUsersResponse(message="Pengguna sudah ada, tidak ada yang dibuat")

    created = []
    for data in DEFAULT_USERS:
        user = await store.users.add(data, hash_password(data.password))
        created.append(UserPublic.model_validate(user))
    logger.info("%d pengguna bawaan dibuat", len(created))
    return InitUsersResponse(message="Pengguna bawaan berhasil dibuat", users=created)
