"""Model Siswa (tabel students)."""
from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Identity, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from simaka.core.database import Base


class StudentRow(Base):
    """Siswa dengan status presensi hari ini, penghitung dan status kenaikan kelas."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=True), primary_key=True)
    nis: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    class_name: Mapped[str] = mapped_column("class", Text, nullable=False, index=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'belum-diisi'"))
    time: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'-'"))
    photo: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    attendance: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    late: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    absent: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    permission: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    # Riwayat kumulatif
    present_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    late_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    absent_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    permission_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    total_attendance_days: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    type: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'existing'"))
    violations: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    achievements: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    promotion_status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'belum-ditetapkan'")
    )
    graduation_status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'belum-lulus'")
    )
    previous_class: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    next_class: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
