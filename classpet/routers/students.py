from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import get_classroom, get_student, owned_classroom, require_user
from classpet.models import Classroom, PetType, Student, User
from classpet.schemas.pet import AssignPetForm, PetRead
from classpet.schemas.student import (
    NewStudentForm,
    RosterImportResult,
    StudentForm,
    StudentUpdateForm,
    StudentWithClassroom,
    StudentWithPet,
)
from classpet.services import pets as pet_service
from classpet.services import roster

router = APIRouter(tags=["students"])


def _pet_type_or_404(session: Session, pet_type_id: int) -> PetType:
    pet_type = session.get(PetType, pet_type_id)
    if not pet_type:
        raise HTTPException(status_code=404, detail="Pet type not found")
    return pet_type


@router.get("/students/all", response_model=list[StudentWithClassroom])
def all_students(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    """Every student across the teacher's classrooms."""
    stmt = (
        select(Student)
        .join(Classroom, Student.classroom_id == Classroom.id)
        .where(Classroom.teacher_id == current_user.id)
        .order_by(Student.classroom_id, Student.id)
    )
    return session.exec(stmt).all()


@router.get("/students/import-template.csv")
def import_template(current_user: User = Depends(require_user)):
    return Response(
        roster.TEMPLATE_CSV,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=students_import_template.csv"},
    )


@router.post("/students", response_model=StudentWithClassroom, status_code=status.HTTP_201_CREATED)
def create_student_in_any_classroom(
    form: NewStudentForm,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    classroom = owned_classroom(session, form.classroom_id, current_user)
    return roster.create_student(session, classroom, form.name.strip(), form.pet_type_id)


@router.get("/classrooms/{classroom_id}/students", response_model=list[StudentWithPet])
def list_classroom_students(classroom: Classroom = Depends(get_classroom)):
    return classroom.students


@router.post("/classrooms/{classroom_id}/students", response_model=StudentWithPet, status_code=status.HTTP_201_CREATED)
def create_student(
    form: StudentForm,
    classroom: Classroom = Depends(get_classroom),
    session: Session = Depends(get_session),
):
    return roster.create_student(session, classroom, form.name.strip(), form.pet_type_id)


@router.post(
    "/classrooms/{classroom_id}/students/import",
    response_model=RosterImportResult,
    status_code=status.HTTP_201_CREATED,
)
async def import_students(
    file: UploadFile = File(...),
    classroom: Classroom = Depends(get_classroom),
    session: Session = Depends(get_session),
):
    """Bulk-create students from a CSV or XLSX roster with a ``name`` column."""
    contents = await file.read()
    df = roster.read_roster(file.filename, contents)
    result = roster.import_students(session, classroom, df)
    return {"created": result.created, "skipped": result.skipped}


@router.get("/students/{student_id}", response_model=StudentWithClassroom)
def show_student(student: Student = Depends(get_student)):
    return student


@router.put("/students/{student_id}", response_model=StudentWithClassroom)
def update_student(
    form: StudentUpdateForm,
    student: Student = Depends(get_student),
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    if form.classroom_id is not None and form.classroom_id != student.classroom_id:
        # Moving requires ownership of the target classroom too
        owned_classroom(session, form.classroom_id, current_user)
        student.classroom_id = form.classroom_id
    student.name = form.name.strip()
    session.add(student)
    session.commit()
    session.refresh(student)
    return student


@router.delete("/students/{student_id}")
def delete_student(student: Student = Depends(get_student), session: Session = Depends(get_session)):
    session.delete(student)
    session.commit()
    return {"message": "Student deleted."}


@router.post("/students/{student_id}/assign-pet", response_model=PetRead, status_code=status.HTTP_201_CREATED)
def assign_pet(
    form: AssignPetForm,
    student: Student = Depends(get_student),
    session: Session = Depends(get_session),
):
    pet_type = _pet_type_or_404(session, form.pet_type_id)
    return pet_service.assign_pet(session, student, pet_type, form.nickname)
