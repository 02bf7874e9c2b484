"""Seed: empat guru bawaan dengan lima slot jadwal, plus siswa contoh.

Memakai backend sesuai STORAGE_BACKEND (database atau file). Tidak melakukan
apa pun pada koleksi yang sudah berisi data.

Jalankan dari root repo:
    python scripts/seed_demo.py
"""
import asyncio
import logging
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from simaka.core.config import settings
from simaka.core.database import AsyncSessionLocal, init_db
from simaka.models import *  # noqa: F401, F403
from simaka.repositories.base import SchoolStore
from simaka.repositories.file import JsonFileStore
from simaka.repositories.sql import create_sql_store
from simaka.schemas.student import StudentCreate, StudentType
from simaka.schemas.teacher import ScheduleItemIn, TeacherCreate

logger = logging.getLogger("seed_demo")

random.seed(42)


def _slot(item_id, day, start, end, class_name, room, description):
    return ScheduleItemIn(
        id=item_id, day=day, start_time=start, end_time=end,
        class_name=class_name, room=room, description=description,
    )


TEACHERS = [
    TeacherCreate(name="Budi Santoko", subject="Matematika", schedule=[
        _slot(1, "Senin", "07:00", "09:30", "X-IPA-1", "Ruang 101", "Mengajar Bab 1: Aljabar"),
        _slot(2, "Senin", "09:45", "12:15", "XI-IPA-2", "Ruang 102", "Mengajar Bab 2: Geometri"),
        _slot(3, "Selasa", "07:00", "09:30", "XII-IPS-1", "Ruang 103", "Mengajar Bab 3: Statistika"),
        _slot(4, "Selasa", "09:45", "12:15", "X-IPS-2", "Ruang 104", "Mengajar Bab 4: Trigonometri"),
        _slot(5, "Rabu", "07:00", "09:30", "XI-IPS-1", "Ruang 105", "Mengajar Bab 5: Kalkulus Dasar"),
    ]),
    TeacherCreate(name="Siti Nurhaliza", subject="Bahasa Indonesia", schedule=[
        _slot(1, "Senin", "07:00", "09:30", "XII-IPA-1", "Ruang 201", "Membahas Cerita Rakyat"),
        _slot(2, "Senin", "09:45", "12:15", "X-IPA-2", "Ruang 202", "Mengajar Puisi Angkatan 60"),
        _slot(3, "Rabu", "07:00", "09:30", "XI-IPS-2", "Ruang 203", "Mempelajari Drama Tradisional"),
        _slot(4, "Rabu", "09:45", "12:15", "XII-IPS-1", "Ruang 204", "Menulis Artikel Ilmiah"),
        _slot(5, "Kamis", "07:00", "09:30", "X-IPS-1", "Ruang 205", "Menganalisis Novel Terkenal"),
    ]),
    TeacherCreate(name="Ahmad Fauzi", subject="Fisika", schedule=[
        _slot(1, "Selasa", "07:00", "09:30", "XI-IPA-1", "Ruang 301", "Mengajar Bab 1: Mekanika"),
        _slot(2, "Selasa", "09:45", "12:15", "XII-IPA-2", "Ruang 302", "Mengajar Bab 2: Termodinamika"),
        _slot(3, "Rabu", "07:00", "09:30", "X-IPA-1", "Ruang 303", "Mengajar Bab 3: Gelombang Bunyi"),
        _slot(4, "Rabu", "09:45", "12:15", "XI-IPS-1", "Ruang 304", "Mengajar Bab 4: Optika"),
        _slot(5, "Jumat", "07:00", "09:30", "XII-IPS-2", "Ruang 305", "Mengajar Bab 5: Listrik Statis"),
    ]),
    TeacherCreate(name="Dewi Kartika", subject="Biologi", schedule=[
        _slot(1, "Senin", "07:00", "09:30", "XII-IPA-1", "Ruang 401", "Mengajar Bab 1: Sel dan Jaringan"),
        _slot(2, "Selasa", "09:45", "12:15", "X-IPA-2", "Ruang 402", "Mengajar Bab 2: Sistem Pernapasan"),
        _slot(3, "Rabu", "07:00", "09:30", "XI-IPA-1", "Ruang 403", "Mengajar Bab 3: Ekosistem"),
        _slot(4, "Kamis", "09:45", "12:15", "XII-IPS-2", "Ruang 404", "Mengajar Bab 4: Evolusi"),
        _slot(5, "Jumat", "07:00", "09:30", "X-IPS-1", "Ruang 405", "Mengajar Bab 5: Genetika"),
    ]),
]

FIRST_NAMES = [
    "Andi", "Rina", "Dimas", "Putri", "Fajar", "Ayu", "Rizky", "Nadia",
    "Bayu", "Sari", "Yoga", "Indah", "Arif", "Wulan", "Gilang", "Maya",
]
LAST_NAMES = [
    "Pratama", "Lestari", "Saputra", "Wijaya", "Hidayat", "Permata",
    "Nugroho", "Kusuma", "Setiawan", "Rahmawati",
]
CLASSES = ["X-IPA-1", "X-IPA-2", "XI-IPA-1", "XI-IPS-1", "XII-IPA-1", "XII-IPS-2"]
TYPES = [StudentType.EXISTING] * 6 + [StudentType.NEW] * 3 + [StudentType.TRANSFER]


def sample_students(total: int = 30) -> list[StudentCreate]:
    return [
        StudentCreate(
            nis=f"2025{i:04d}",
            name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
            class_name=random.choice(CLASSES),
            type=random.choice(TYPES),
        )
        for i in range(1, total + 1)
    ]


async def seed(store: SchoolStore) -> None:
    if await store.teachers.find():
        logger.info("Guru sudah ada, dilewati")
    else:
        for teacher in TEACHERS:
            await store.teachers.add(teacher)
        logger.info("%d guru dibuat", len(TEACHERS))

    if await store.students.find():
        logger.info("Siswa sudah ada, dilewati")
    else:
        students = sample_students()
        for data in students:
            await store.students.add(data)
        logger.info("%d siswa dibuat", len(students))


async def main() -> None:
    if settings.storage_backend == "file":
        await seed(JsonFileStore(settings.data_file))
        return
    if settings.storage_backend != "database":
        logger.error("STORAGE_BACKEND=memory tidak menyimpan apa pun; gunakan database atau file")
        return

    await init_db()
    async with AsyncSessionLocal() as session:
        await seed(create_sql_store(session))
        await session.commit()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(main())
