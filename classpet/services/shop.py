from __future__ import annotations

import logging

from sqlmodel import Session, select

from classpet.errors import AlreadyOwned, NoPet, NotOwned
from classpet.models import (
    PetType,
    RARITY_RANK,
    ShopItem,
    ShopItemType,
    Student,
    StudentItem,
    TransactionSource,
)
from classpet.services.points import spend_coins

log = logging.getLogger(__name__)

SLOT_FIELDS = {
    ShopItemType.AVATAR_FRAME: "equipped_frame_id",
    ShopItemType.BACKGROUND: "equipped_background_id",
}


def list_items(session: Session, item_type: ShopItemType | None = None) -> list[ShopItem]:
    stmt = select(ShopItem)
    if item_type is not None:
        stmt = stmt.where(ShopItem.type == item_type)
    return list(session.exec(stmt.order_by(ShopItem.rarity, ShopItem.price, ShopItem.id)).all())


def shop_pet_types(session: Session) -> list[PetType]:
    """Active pet types that cost coins, cheapest rarity first."""
    rows = session.exec(select(PetType).where(PetType.is_active == True, PetType.price > 0)).all()  # noqa: E712
    return sorted(rows, key=lambda t: (RARITY_RANK[t.rarity], t.price, t.id))


def delete_item(session: Session, item: ShopItem) -> None:
    """Remove an item, un-equipping it and dropping it from every student's collection."""
    for field in SLOT_FIELDS.values():
        for student in session.exec(select(Student).where(getattr(Student, field) == item.id)).all():
            setattr(student, field, None)
            session.add(student)
    for owned in session.exec(select(StudentItem).where(StudentItem.shop_item_id == item.id)).all():
        session.delete(owned)
    session.delete(item)
    session.commit()


def purchase(session: Session, student: Student, item: ShopItem) -> StudentItem:
    if student.owns_item(item.id):
        raise AlreadyOwned()

    try:
        spend_coins(session, student, item.price, f"Bought {item.name}", TransactionSource.SHOP)
        owned = StudentItem(student_id=student.id, shop_item_id=item.id, is_equipped=False)
        session.add(owned)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(owned)
    session.refresh(student)
    log.info("Student %s bought shop item %s for %d", student.id, item.id, item.price)
    return owned


def _mark_equipped(student: Student, item_type: ShopItemType, equipped_id: int | None) -> None:
    for owned in student.owned_items:
        if owned.shop_item.type == item_type:
            owned.is_equipped = owned.shop_item_id == equipped_id


def equip(session: Session, student: Student, item: ShopItem) -> Student:
    """
    Equip an owned item. Frames and backgrounds fill their slot; a pet item
    switches the student's pet to the pet type carrying the same name.
    """
    if not student.owns_item(item.id):
        raise NotOwned()

    if item.type in SLOT_FIELDS:
        setattr(student, SLOT_FIELDS[item.type], item.id)
        _mark_equipped(student, item.type, item.id)
    elif item.type == ShopItemType.PET:
        pet_type = session.exec(select(PetType).where(PetType.name == item.name)).first()
        if pet_type and student.pet:
            student.pet.pet_type_id = pet_type.id
            session.add(student.pet)

    session.add(student)
    session.commit()
    session.refresh(student)
    return student


def unequip(session: Session, student: Student, slot: ShopItemType) -> Student:
    setattr(student, SLOT_FIELDS[slot], None)
    _mark_equipped(student, slot, None)
    session.add(student)
    session.commit()
    session.refresh(student)
    return student


def change_pet(session: Session, student: Student, pet_type: PetType):
    pet = student.pet
    if not pet:
        raise NoPet()
    pet.pet_type_id = pet_type.id
    session.add(pet)
    session.commit()
    session.refresh(pet)
    return pet
