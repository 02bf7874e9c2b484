"""Model Guru dan slot jadwal mengajar."""
from sqlalchemy import BigInteger, ForeignKey, Identity, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simaka.core.database import Base


class TeacherRow(Base):
    """Guru dengan mata pelajaran dan jadwal terurut."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    photo: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    schedule_items: Mapped[list["ScheduleItemRow"]] = relationship(
        "ScheduleItemRow",
        back_populates="teacher",
        order_by="ScheduleItemRow.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ScheduleItemRow(Base):
    """Slot jadwal. item_id adalah ID yang dilihat client (bisa epoch ms), bukan PK."""

    __tablename__ = "schedule_items"

    pk: Mapped[int] = mapped_column(BigInteger, Identity(always=True), primary_key=True)
    item_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    teacher_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[str] = mapped_column(Text, nullable=False)
    start_time: Mapped[str] = mapped_column(Text, nullable=False)
    end_time: Mapped[str] = mapped_column(Text, nullable=False)
    class_name: Mapped[str] = mapped_column("class", Text, nullable=False)
    room: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    teacher: Mapped["TeacherRow"] = relationship("TeacherRow", back_populates="schedule_items")
