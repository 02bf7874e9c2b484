"""Model pengaturan sekolah (satu baris)."""
from sqlalchemy import BigInteger, Boolean, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from simaka.core.database import Base


class SchoolSettingsRow(Base):
    __tablename__ = "school_settings"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    school_name: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'Educore'"))
    academic_year: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'2025/2026'"))
    semester: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'Ganjil'"))
    start_time: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'07:00'"))
    end_time: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'15:00'"))
    notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    language: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'id'"))
    theme: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'light'"))
