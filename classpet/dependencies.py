from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from .config import settings
from .db import get_session
from .models import Classroom, Student, User
from .security import read_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Optional[User]:
    """Resolves the teacher from a bearer token, falling back to the auth cookie."""
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return None

    teacher_id = read_access_token(token)
    if teacher_id is None:
        return None
    return session.get(User, teacher_id)


def require_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def owned_classroom(session: Session, classroom_id: int, user: User) -> Classroom:
    classroom = session.get(Classroom, classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    if classroom.teacher_id != user.id:
        raise HTTPException(status_code=403, detail="Permission denied")
    return classroom


def get_student_or_404(session: Session, student_id: int) -> Student:
    student = session.get(Student, student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


def owned_student(session: Session, student_id: int, user: User) -> Student:
    student = get_student_or_404(session, student_id)
    if student.classroom.teacher_id != user.id:
        raise HTTPException(status_code=403, detail="Permission denied")
    return student


def get_classroom(
    classroom_id: int,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
) -> Classroom:
    """Path dependency: a classroom owned by the current teacher."""
    return owned_classroom(session, classroom_id, current_user)


def get_student(
    student_id: int,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
) -> Student:
    """Path dependency: a student in one of the current teacher's classrooms."""
    return owned_student(session, student_id, current_user)


def get_public_student(student_id: int, session: Session = Depends(get_session)) -> Student:
    return get_student_or_404(session, student_id)
