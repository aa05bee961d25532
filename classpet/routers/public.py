"""Unauthenticated endpoints backing the classroom TV screen."""
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import get_public_student
from classpet.models import Classroom, Student
from classpet.routers.pets import feed_pet, pet_details
from classpet.schemas.classroom import ClassroomRead, PublicClassroom
from classpet.schemas.pet import FeedPetForm, FeedPetResult, InventoryRead, PetDetails
from classpet.schemas.student import RankedStudent
from classpet.services import inventory as inventory_service
from classpet.templating import render_template

router = APIRouter(prefix="/public", tags=["public"])
tv_router = APIRouter(tags=["public"])


def _classroom_by_slug(session: Session, slug: str) -> Classroom:
    classroom = session.exec(select(Classroom).where(Classroom.public_slug == slug)).first()
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom


def ranked_students(students: list[Student]) -> list[RankedStudent]:
    """Leaderboard order: lifetime coins earned, then current balance, then name."""
    ordered = sorted(students, key=lambda s: (-s.total_points_earned, -s.points_balance, s.name.lower(), s.id))
    ranked = []
    for position, student in enumerate(ordered, start=1):
        row = RankedStudent.model_validate(student)
        row.rank = position
        ranked.append(row)
    return ranked


def leaderboard(session: Session, slug: str) -> PublicClassroom:
    classroom = _classroom_by_slug(session, slug)
    base = ClassroomRead.model_validate(classroom)
    return PublicClassroom(**base.model_dump(), students=ranked_students(classroom.students))


@router.get("/classrooms/{slug}", response_model=PublicClassroom)
def show_classroom(slug: str, session: Session = Depends(get_session)):
    return leaderboard(session, slug)


@router.get("/students/{student_id}/pet", response_model=PetDetails)
def student_pet(student: Student = Depends(get_public_student), session: Session = Depends(get_session)):
    return pet_details(session, student)


@router.get("/students/{student_id}/inventory", response_model=list[InventoryRead])
def student_inventory(student: Student = Depends(get_public_student), session: Session = Depends(get_session)):
    return inventory_service.list_inventory(session, student)


@router.post("/students/{student_id}/feed-pet", response_model=FeedPetResult)
def student_feed_pet(
    form: FeedPetForm,
    student: Student = Depends(get_public_student),
    session: Session = Depends(get_session),
):
    return feed_pet(session, student, form.pet_food_id)


@tv_router.get("/tv/{slug}", response_class=HTMLResponse)
def tv_board(slug: str, request: Request, session: Session = Depends(get_session)):
    board = leaderboard(session, slug)
    return render_template(request, "public/board.html", {"classroom": board})
