"""Adapter blob JSON lokal: {"students": [...], "settings": {...}, "teachers": [...]}.

Data dimuat sekali saat store dibuat dan seluruh blob ditulis ulang setiap kali
ada perubahan. Kunci camelCase dari versi lama (promotionStatus, class, ...)
diterima saat memuat; penulisan selalu memakai snake_case. Blob juga menyimpan
last_student_id dan last_teacher_id agar ID yang dihapus tidak terpakai lagi
setelah restart.
"""
import json
import logging
import os
import re
from pathlib import Path

from simaka.repositories.base import SchoolStore
from simaka.repositories.memory import (
    MemorySettingsRepository,
    MemoryStudentRepository,
    MemoryTeacherRepository,
    MemoryUserRepository,
)
from simaka.schemas.settings import SchoolSettings
from simaka.schemas.student import Student
from simaka.schemas.teacher import Teacher

logger = logging.getLogger(__name__)

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(record: dict) -> dict:
    """promotionStatus -> promotion_status, class -> class_name."""
    out = {}
    for key, value in record.items():
        key = "class_name" if key == "class" else _CAMEL.sub("_", key).lower()
        if isinstance(value, list):
            value = [_snake_keys(v) if isinstance(v, dict) else v for v in value]
        out[key] = value
    return out


class JsonFileStore(SchoolStore):
    """SchoolStore di memori yang dipersistenkan ke satu berkas JSON."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        raw = self._load()
        students = [Student.model_validate(_snake_keys(s)) for s in raw.get("students", [])]
        teachers = [Teacher.model_validate(_snake_keys(t)) for t in raw.get("teachers", [])]
        school_settings = (
            SchoolSettings.model_validate(_snake_keys(raw["settings"])) if raw.get("settings") else None
        )
        super().__init__(
            students=MemoryStudentRepository(
                students, on_change=self.save, last_id=raw.get("last_student_id", 0)
            ),
            teachers=MemoryTeacherRepository(
                teachers, on_change=self.save, last_id=raw.get("last_teacher_id", 0)
            ),
            settings=MemorySettingsRepository(school_settings, on_change=self.save),
            users=MemoryUserRepository(),
        )
        logger.info(
            "Memuat %d siswa dan %d guru dari '%s'", len(students), len(teachers), self.path
        )

    def _load(self) -> dict:
        if not self.path.exists():
            logger.info("Berkas data '%s' belum ada; mulai dengan data kosong", self.path)
            return {}
        return _snake_keys(json.loads(self.path.read_text(encoding="utf-8")))

    def save(self) -> None:
        """Menulis blob ke berkas sementara lalu menggantinya secara atomik."""
        blob = {
            "students": [s.model_dump(mode="json") for s in self.students.snapshot()],
            "settings": self.settings.snapshot().model_dump(mode="json"),
            "teachers": [t.model_dump(mode="json") for t in self.teachers.snapshot()],
            "last_student_id": self.students.last_id,
            "last_teacher_id": self.teachers.last_id,
        }
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(blob, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("Data disimpan ke '%s'", self.path)
