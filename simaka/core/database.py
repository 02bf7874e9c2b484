"""Koneksi asinkron ke PostgreSQL dengan SQLAlchemy 2.0."""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from simaka.core.config import settings


engine = create_async_engine(
    settings.database_url_async,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base untuk semua model SQLAlchemy."""

    pass


async def get_db():
    """Dependensi untuk memperoleh satu sesi database per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Membuat tabel bila belum ada."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
