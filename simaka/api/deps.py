"""Dependensi FastAPI: store yang diinjeksikan dan pengguna dari JWT."""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from simaka.core.config import settings
from simaka.core.database import get_db
from simaka.core.security import decode_access_token
from simaka.repositories.base import SchoolStore
from simaka.repositories.sql import create_sql_store
from simaka.schemas.auth import User

security = HTTPBearer(auto_error=False)


async def get_store(request: Request, db: AsyncSession = Depends(get_db)) -> SchoolStore:
    """Store sesuai STORAGE_BACKEND: SQL per request, atau store proses di app.state."""
    if settings.storage_backend == "database":
        return create_sql_store(db)
    return request.app.state.store


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    store: SchoolStore = Depends(get_store),
) -> User:
    """Dependensi: mewajibkan JWT valid dan mengembalikan pengguna saat ini."""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token autentikasi tidak diberikan atau tidak valid",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token tidak valid atau kedaluwarsa",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = await store.users.get(int(payload["sub"]))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Pengguna tidak ditemukan",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
