from __future__ import annotations

import logging

from sqlmodel import Session, select

from classpet.config import settings
from classpet.errors import InsufficientCoins
from classpet.models import Classroom, PointTransaction, Student, TransactionSource, User

log = logging.getLogger(__name__)


def award_points(session: Session, student: Student, amount: int, reason: str | None, *, commit: bool = True) -> PointTransaction:
    """
    Add (or, with a negative amount, deduct) coins and write a manual ledger row.
    Only positive awards count towards ``total_points_earned``; a deduction may
    leave the balance negative.
    """
    student.points_balance += amount
    if amount > 0:
        student.total_points_earned += amount

    entry = PointTransaction(
        student_id=student.id,
        amount=amount,
        reason=reason,
        source=TransactionSource.MANUAL,
    )
    session.add(student)
    session.add(entry)
    if commit:
        session.commit()
        session.refresh(student)
    log.info("Student %s %+d coins (%s), balance=%d", student.id, amount, reason or "-", student.points_balance)
    return entry


def spend_coins(
    session: Session,
    student: Student,
    cost: int,
    reason: str,
    source: TransactionSource,
) -> PointTransaction:
    """
    Debit ``cost`` coins, refusing when the balance is short.
    Does not commit; the caller wraps the debit with whatever it pays for.
    """
    if student.points_balance < cost:
        raise InsufficientCoins(required=cost, balance=student.points_balance)

    student.points_balance -= cost
    entry = PointTransaction(student_id=student.id, amount=-cost, reason=reason, source=source)
    session.add(student)
    session.add(entry)
    log.info("Student %s spent %d coins on %s", student.id, cost, reason)
    return entry


def recent_transactions(session: Session, teacher: User, limit: int | None = None) -> list[PointTransaction]:
    limit = limit or settings.RECENT_TRANSACTIONS_LIMIT
    stmt = (
        select(PointTransaction)
        .join(Student, PointTransaction.student_id == Student.id)
        .join(Classroom, Student.classroom_id == Classroom.id)
        .where(Classroom.teacher_id == teacher.id)
        .order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc())
        .limit(limit)
    )
    return list(session.exec(stmt).all())


def student_transactions(session: Session, student: Student) -> list[PointTransaction]:
    stmt = (
        select(PointTransaction)
        .where(PointTransaction.student_id == student.id)
        .order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc())
    )
    return list(session.exec(stmt).all())
