"""Titik masuk aplikasi FastAPI."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simaka.api import router as api_router
from simaka.core.config import settings
from simaka.core.database import init_db
from simaka.core.errors import add_error_handlers
from simaka.models import *  # noqa: F401, F403 - mendaftarkan model ke Base.metadata sebelum init_db
from simaka.repositories.file import JsonFileStore
from simaka.repositories.memory import create_memory_store

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
for noisy in ("sqlalchemy.engine", "asyncio", "multipart"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Dokumentasi Swagger: tersedia di /docs (OpenAPI 3.0)
OPENAPI_TAGS = [
    {"name": "auth", "description": "Login dengan email dan kata sandi; mengembalikan JWT."},
    {"name": "students", "description": "Data siswa, pindah kelas, kenaikan kelas dan impor massal."},
    {"name": "attendance", "description": "Presensi harian dan statistik kehadiran."},
    {"name": "reports", "description": "Laporan ringkasan, performa, detail, per kelas, kenaikan dan presensi."},
    {"name": "teachers", "description": "Data guru dan jadwal mengajar."},
    {"name": "settings", "description": "Pengaturan sekolah."},
    {"name": "health", "description": "Pemeriksaan status layanan."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Menyiapkan store sesuai STORAGE_BACKEND saat aplikasi mulai."""
    if settings.storage_backend == "database":
        await init_db()
        logger.info("Penyimpanan: PostgreSQL %s/%s", settings.postgres_host, settings.postgres_db)
    elif settings.storage_backend == "file":
        app.state.store = JsonFileStore(settings.data_file)
        logger.info("Penyimpanan: berkas JSON '%s'", settings.data_file)
    else:
        app.state.store = create_memory_store()
        logger.warning("Penyimpanan: memori proses; data hilang saat restart")
    yield


app = FastAPI(
    title=settings.app_name,
    description="""
API REST **SIMAKA**: presensi harian siswa, status kenaikan kelas, jadwal guru
dan ekspor laporan (PDF, Excel, CSV).

- **Swagger UI:** [GET /docs](/docs)
- **ReDoc:** [GET /redoc](/redoc)
""",
    version="0.1.0",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get(
    "/health",
    tags=["health"],
    summary="Status layanan",
    response_description="Menandakan API sedang berjalan",
)
async def health_check():
    """Tidak memerlukan autentikasi."""
    return {"status": "ok", "message": "Layanan berjalan", "storage": settings.storage_backend}
