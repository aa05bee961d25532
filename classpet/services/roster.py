from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

import pandas as pd
from sqlmodel import Session, select

from classpet.errors import RosterFileError
from classpet.models import Classroom, PetType, Student, StudentPet
from classpet.services.pets import choose_starter_type

log = logging.getLogger(__name__)

TEMPLATE_CSV = (
    "name,pet_type\n"
    "Kai Nguyen,Puppy\n"
    "Mia Singh,\n"
)


@dataclass
class RosterImport:
    created: list[Student] = field(default_factory=list)
    skipped: int = 0


def read_roster(filename: str, contents: bytes) -> pd.DataFrame:
    fname = (filename or "").lower()
    try:
        if fname.endswith(".csv"):
            df = pd.read_csv(io.BytesIO(contents), dtype=str, keep_default_na=False)
        elif fname.endswith((".xlsx", ".xls")):
            df = pd.read_excel(io.BytesIO(contents), dtype=str).fillna("")
        else:
            raise RosterFileError("Unsupported file type. Please upload .csv or .xlsx")
    except RosterFileError:
        raise
    except Exception as e:
        raise RosterFileError(f"Could not read file: {e}")

    df.columns = [str(c).strip().lower() for c in df.columns]
    if "name" not in df.columns:
        raise RosterFileError("Missing required column: name")
    return df


def create_student(
    session: Session,
    classroom: Classroom,
    name: str,
    pet_type_id: int | None = None,
    *,
    commit: bool = True,
) -> Student:
    """Add a student with zero coins and a starter pet, when the catalogue has one."""
    student = Student(classroom_id=classroom.id, name=name, points_balance=0, total_points_earned=0)
    session.add(student)
    session.flush()

    pet_type = choose_starter_type(session, pet_type_id)
    if pet_type:
        session.add(StudentPet(student_id=student.id, pet_type_id=pet_type.id, level=1, current_exp=0))

    if commit:
        session.commit()
        session.refresh(student)
    return student


def import_students(session: Session, classroom: Classroom, df: pd.DataFrame) -> RosterImport:
    """Create one student per named row, each with a starter pet."""
    result = RosterImport()
    has_pet_type = "pet_type" in df.columns
    types_by_name = {t.name.lower(): t for t in session.exec(select(PetType)).all()}

    for _, row in df.iterrows():
        name = str(row.get("name", "")).strip()
        if not name:
            result.skipped += 1
            continue

        requested = None
        if has_pet_type:
            requested = types_by_name.get(str(row.get("pet_type", "")).strip().lower())

        student = create_student(session, classroom, name[:255], requested.id if requested else None, commit=False)
        result.created.append(student)

    session.commit()
    for student in result.created:
        session.refresh(student)
    log.info("Imported %d students into classroom %s (%d skipped)", len(result.created), classroom.id, result.skipped)
    return result
