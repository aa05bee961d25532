from fastapi import APIRouter, Depends
from sqlmodel import Session

from classpet.db import get_session
from classpet.dependencies import get_student, require_user
from classpet.models import Student, User
from classpet.schemas.point import PointAdjustmentForm, PointTransactionRead, PointTransactionWithStudent
from classpet.schemas.student import StudentRead
from classpet.services import points as point_service

router = APIRouter(tags=["points"])


@router.post("/students/{student_id}/points", response_model=StudentRead)
def award_points(
    form: PointAdjustmentForm,
    student: Student = Depends(get_student),
    session: Session = Depends(get_session),
):
    point_service.award_points(session, student, form.amount, form.reason)
    return student


@router.get("/point-transactions", response_model=list[PointTransactionWithStudent])
def recent_transactions(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    return point_service.recent_transactions(session, current_user)


@router.get("/students/{student_id}/transactions", response_model=list[PointTransactionRead])
def student_transactions(student: Student = Depends(get_student), session: Session = Depends(get_session)):
    return point_service.student_transactions(session, student)
