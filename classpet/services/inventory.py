from __future__ import annotations

import logging

from sqlmodel import Session, select

from classpet.errors import FoodNotInInventory, NoPet
from classpet.models import PetFood, Student, StudentInventory, TransactionSource
from classpet.services.pets import feed_with_food
from classpet.services.points import spend_coins

log = logging.getLogger(__name__)


def _row(session: Session, student_id: int, pet_food_id: int) -> StudentInventory | None:
    return session.exec(
        select(StudentInventory).where(
            StudentInventory.student_id == student_id,
            StudentInventory.pet_food_id == pet_food_id,
        )
    ).first()


def add_food(session: Session, student: Student, food: PetFood, quantity: int = 1) -> StudentInventory:
    row = _row(session, student.id, food.id)
    if row is None:
        row = StudentInventory(student_id=student.id, pet_food_id=food.id, quantity=0)
    row.quantity += quantity
    session.add(row)
    return row


def use_food(session: Session, student: Student, food: PetFood, quantity: int = 1) -> bool:
    """Take ``quantity`` of a food out of the bag; the row is removed once empty."""
    row = _row(session, student.id, food.id)
    if row is None or row.quantity < quantity:
        return False

    row.quantity -= quantity
    if row.quantity <= 0:
        session.delete(row)
    else:
        session.add(row)
    return True


def list_inventory(session: Session, student: Student) -> list[StudentInventory]:
    return list(session.exec(
        select(StudentInventory)
        .where(StudentInventory.student_id == student.id, StudentInventory.quantity > 0)
        .order_by(StudentInventory.pet_food_id)
    ).all())


def buy_food(session: Session, student: Student, food: PetFood, quantity: int) -> StudentInventory:
    total_cost = food.price * quantity
    try:
        spend_coins(session, student, total_cost, f"Bought {quantity} x {food.name}", TransactionSource.FOOD)
        row = add_food(session, student, food, quantity)
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(row)
    session.refresh(student)
    return row


def feed_from_inventory(session: Session, student: Student, food: PetFood) -> dict:
    """Use one food from the bag on the student's pet. Returns the new pet stats."""
    pet = student.pet
    if not pet:
        raise NoPet()

    try:
        if not use_food(session, student, food):
            raise FoodNotInInventory()
        stats = feed_with_food(session, pet, food)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(pet)
    log.info("Pet %s ate %s: hunger=%d happiness=%d", pet.id, food.name, pet.hunger_level, pet.happiness_level)
    return stats
