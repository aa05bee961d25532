from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import get_classroom, require_user
from classpet.models import Classroom, User
from classpet.schemas.classroom import (
    ClassroomDetail,
    ClassroomForm,
    ClassroomRead,
    ClassroomUpdateForm,
    ClassroomWithCount,
)

router = APIRouter(prefix="/classrooms", tags=["classrooms"])


@router.get("", response_model=list[ClassroomWithCount])
def list_classrooms(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    stmt = (
        select(Classroom)
        .where(Classroom.teacher_id == current_user.id)
        .order_by(Classroom.created_at.desc(), Classroom.id.desc())
    )
    return session.exec(stmt).all()


@router.post("", response_model=ClassroomRead, status_code=status.HTTP_201_CREATED)
def create_classroom(
    form: ClassroomForm,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    classroom = Classroom(teacher_id=current_user.id, name=form.name.strip(), theme=form.theme)
    session.add(classroom)
    session.commit()
    session.refresh(classroom)
    return classroom


@router.get("/{classroom_id}", response_model=ClassroomDetail)
def show_classroom(classroom: Classroom = Depends(get_classroom)):
    return classroom


@router.api_route("/{classroom_id}", methods=["PUT", "PATCH"], response_model=ClassroomRead)
def update_classroom(
    form: ClassroomUpdateForm,
    classroom: Classroom = Depends(get_classroom),
    session: Session = Depends(get_session),
):
    for key, value in form.model_dump(exclude_unset=True).items():
        if key == "name" and value is None:
            continue
        setattr(classroom, key, value)
    session.add(classroom)
    session.commit()
    session.refresh(classroom)
    return classroom


@router.delete("/{classroom_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_classroom(classroom: Classroom = Depends(get_classroom), session: Session = Depends(get_session)):
    session.delete(classroom)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
