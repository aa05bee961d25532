from __future__ import annotations

import logging
import random

from sqlmodel import Session, select

from classpet.errors import AlreadyOwned, InsufficientCoins, NoPet, NotPurchasable
from classpet.models import (
    PetFeedLog,
    PetFood,
    PetMood,
    PetRarity,
    PetType,
    Student,
    StudentPet,
    TransactionSource,
)
from classpet.services.points import spend_coins
from classpet.utils import utcnow

log = logging.getLogger(__name__)

MAX_STAT = 100
HUNGRY_BELOW = 30
EXP_PER_LEVEL = 100

# Coin-for-EXP feeding
FEED_COST_PER_FOOD = 10
FEED_EXP_PER_FOOD = 50


def calculate_mood(hunger_level: int, happiness_level: int) -> PetMood:
    """Mood from the two counters; the first matching rule wins."""
    if hunger_level <= 20:
        return PetMood.HUNGRY
    if happiness_level <= 30:
        return PetMood.SAD
    if happiness_level >= 80 and hunger_level >= 60:
        return PetMood.HAPPY
    return PetMood.NORMAL


def apply_mood(pet: StudentPet) -> None:
    pet.is_hungry = pet.hunger_level < HUNGRY_BELOW
    pet.mood = calculate_mood(pet.hunger_level, pet.happiness_level)


def refresh_mood(session: Session, pet: StudentPet) -> StudentPet:
    apply_mood(pet)
    session.add(pet)
    session.commit()
    session.refresh(pet)
    return pet


def level_up(pet: StudentPet, max_level: int) -> bool:
    """Spend EXP on levels while the threshold (level * 100) is met. Returns True if any level was gained."""
    leveled_up = False
    while pet.current_exp >= pet.level * EXP_PER_LEVEL and pet.level < max_level:
        pet.current_exp -= pet.level * EXP_PER_LEVEL
        pet.level += 1
        leveled_up = True
    return leveled_up


def feed_with_food(session: Session, pet: StudentPet, food: PetFood) -> dict:
    """Restore hunger/happiness from one food item, capped at 100, and log the change."""
    hunger_before = pet.hunger_level
    happiness_before = pet.happiness_level

    pet.hunger_level = min(MAX_STAT, pet.hunger_level + food.hunger_restore)
    pet.happiness_level = min(MAX_STAT, pet.happiness_level + food.happiness_boost)
    apply_mood(pet)
    pet.last_fed_at = utcnow()
    session.add(pet)

    session.add(PetFeedLog(
        student_pet_id=pet.id,
        pet_food_id=food.id,
        hunger_before=hunger_before,
        hunger_after=pet.hunger_level,
        happiness_before=happiness_before,
        happiness_after=pet.happiness_level,
    ))

    return {
        "hunger_level": pet.hunger_level,
        "happiness_level": pet.happiness_level,
        "mood": pet.mood,
    }


def feed_for_exp(session: Session, student: Student, food_amount: int) -> dict:
    """
    Trade coins for pet EXP: each unit costs 10 coins and grants 50 EXP.
    Debit, ledger row, EXP and level-ups are committed together.
    """
    total_cost = food_amount * FEED_COST_PER_FOOD
    if student.points_balance < total_cost:
        raise InsufficientCoins(required=total_cost, balance=student.points_balance, current=student.points_balance)

    pet = student.pet
    if not pet:
        raise NoPet()

    try:
        spend_coins(session, student, total_cost, f"Fed pet {food_amount} items", TransactionSource.FEED)

        exp_gained = food_amount * FEED_EXP_PER_FOOD
        previous_level = pet.level
        pet.current_exp += exp_gained
        leveled_up = level_up(pet, pet.type.max_level)
        session.add(pet)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(student)
    session.refresh(pet)
    if leveled_up:
        log.info("Pet %s leveled up %d -> %d", pet.id, previous_level, pet.level)

    return {
        "student": student,
        "leveled_up": leveled_up,
        "new_level": pet.level,
        "previous_level": previous_level,
        "exp_gained": exp_gained,
    }


def decrease_hunger(pet: StudentPet, amount: int = 5) -> None:
    pet.hunger_level = max(0, pet.hunger_level - amount)
    apply_mood(pet)


def decay_all_pets(session: Session, amount: int = 5) -> int:
    pets = session.exec(select(StudentPet)).all()
    for pet in pets:
        decrease_hunger(pet, amount)
        session.add(pet)
    session.commit()
    return len(pets)


def choose_starter_type(session: Session, requested_id: int | None = None) -> PetType | None:
    """
    Starter pets must be of normal rarity. A requested type is honoured only if
    it is normal; otherwise a random normal type is picked, falling back to any
    type when no request was made and the catalogue has no normal pets.
    """
    normal_types = session.exec(select(PetType).where(PetType.rarity == PetRarity.NORMAL)).all()

    if requested_id:
        requested = session.get(PetType, requested_id)
        if requested and requested.rarity == PetRarity.NORMAL:
            return requested
        return random.choice(normal_types) if normal_types else None

    if normal_types:
        return random.choice(normal_types)
    any_types = session.exec(select(PetType)).all()
    return random.choice(any_types) if any_types else None


def assign_pet(session: Session, student: Student, pet_type: PetType, nickname: str | None = None) -> StudentPet:
    """Create the student's pet, or reset the existing one to level 1 with the new type."""
    pet = student.pet
    if pet:
        pet.pet_type_id = pet_type.id
        pet.nickname = nickname
        pet.level = 1
        pet.current_exp = 0
        pet.is_hungry = False
    else:
        pet = StudentPet(
            student_id=student.id,
            pet_type_id=pet_type.id,
            nickname=nickname,
            level=1,
            current_exp=0,
        )
    session.add(pet)
    session.commit()
    session.refresh(pet)
    return pet


def buy_pet(session: Session, student: Student, pet_type: PetType) -> StudentPet:
    if pet_type.price <= 0:
        raise NotPurchasable("This pet cannot be bought!")

    pet = student.pet
    if pet and pet.pet_type_id == pet_type.id:
        raise AlreadyOwned("The student already has this pet!")

    try:
        spend_coins(session, student, pet_type.price, f"Bought pet {pet_type.name}", TransactionSource.PET)
        if not pet:
            pet = StudentPet(student_id=student.id, pet_type_id=pet_type.id)
        pet.pet_type_id = pet_type.id
        pet.nickname = pet_type.name
        pet.level = 1
        pet.current_exp = 0
        pet.hunger_level = MAX_STAT
        pet.happiness_level = MAX_STAT
        pet.is_hungry = False
        pet.mood = PetMood.HAPPY
        session.add(pet)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(pet)
    session.refresh(student)
    log.info("Student %s bought pet type %s", student.id, pet_type.id)
    return pet
