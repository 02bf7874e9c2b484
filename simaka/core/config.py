"""Konfigurasi aplikasi melalui variabel lingkungan."""
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Konfigurasi yang dibaca dari .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "SIMAKA API"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Penyimpanan: database (PostgreSQL), memory (uji/dev) atau file (blob JSON lokal)
    storage_backend: Literal["database", "memory", "file"] = "database"
    data_file: str = "simaka_data.json"

    # CORS: dipisah koma di .env ("http://a,http://b")
    cors_origins: str = "*"

    @field_validator("cors_origins")
    @classmethod
    def _strip_origins(cls, v: str) -> str:
        return v.strip() or "*"

    # JWT
    jwt_secret_key: str = "ganti-di-produksi-kunci-rahasia-simaka"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24  # 24 jam

    # PostgreSQL
    postgres_host: str = "127.0.0.1"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "simaka_bd"

    # Laporan
    school_name: str = "Educore"
    timezone_offset_hours: int = 7  # WIB

    @property
    def cors_origin_list(self) -> list[str]:
        return [s.strip() for s in self.cors_origins.split(",") if s.strip()]

    @property
    def database_url_async(self) -> str:
        """URL SQLAlchemy dengan driver asyncpg (dipakai aplikasi)."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
