from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import get_student, require_user
from classpet.models import PetType, ShopItem, ShopItemType, Student
from classpet.schemas.pet import ChangePetResult, PetTypeChoice, PetTypeRead
from classpet.schemas.shop import (
    PurchaseResult,
    ShopItemChoice,
    ShopItemForm,
    ShopItemRead,
    StudentItems,
    UnequipForm,
)
from classpet.schemas.student import EquipResult
from classpet.services import shop as shop_service

router = APIRouter(tags=["shop"])


def _get_item(session: Session, shop_item_id: int) -> ShopItem:
    item = session.get(ShopItem, shop_item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Shop item not found")
    return item


# --- Catalogue ---

@router.get("/shop/items", response_model=list[ShopItemRead], dependencies=[Depends(require_user)])
def list_items(type: Optional[ShopItemType] = Query(default=None), session: Session = Depends(get_session)):
    return shop_service.list_items(session, type)


@router.post("/shop/items", response_model=ShopItemRead, status_code=201, dependencies=[Depends(require_user)])
def create_item(form: ShopItemForm, session: Session = Depends(get_session)):
    item = ShopItem(**form.model_dump())
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@router.put("/shop/items/{shop_item_id}", response_model=ShopItemRead, dependencies=[Depends(require_user)])
def update_item(shop_item_id: int, form: ShopItemForm, session: Session = Depends(get_session)):
    item = _get_item(session, shop_item_id)
    for key, value in form.model_dump(exclude_unset=True).items():
        setattr(item, key, value)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@router.delete("/shop/items/{shop_item_id}", dependencies=[Depends(require_user)])
def delete_item(shop_item_id: int, session: Session = Depends(get_session)):
    shop_service.delete_item(session, _get_item(session, shop_item_id))
    return {"message": "Shop item deleted."}


@router.get("/shop/pet-types", response_model=list[PetTypeRead], dependencies=[Depends(require_user)])
def pet_types(session: Session = Depends(get_session)):
    """Every pet type, free starters included, as change-pet targets."""
    return session.exec(select(PetType).order_by(PetType.id)).all()


# --- Student side ---

@router.get("/students/{student_id}/items", response_model=StudentItems)
def student_items(student: Student = Depends(get_student)):
    return {
        "items": student.owned_items,
        "equipped_frame_id": student.equipped_frame_id,
        "equipped_background_id": student.equipped_background_id,
    }


@router.post("/students/{student_id}/purchase", response_model=PurchaseResult)
def purchase(form: ShopItemChoice, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    item = _get_item(session, form.shop_item_id)
    shop_service.purchase(session, student, item)
    return {"message": "Purchase complete! 🎉", "item": item, "new_balance": student.points_balance}


@router.post("/students/{student_id}/equip", response_model=EquipResult)
def equip(form: ShopItemChoice, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    item = _get_item(session, form.shop_item_id)
    return {"message": "Equipped!", "student": shop_service.equip(session, student, item)}


@router.post("/students/{student_id}/unequip", response_model=EquipResult)
def unequip(form: UnequipForm, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    return {"message": "Unequipped!", "student": shop_service.unequip(session, student, ShopItemType(form.type))}


@router.post("/students/{student_id}/change-pet", response_model=ChangePetResult)
def change_pet(form: PetTypeChoice, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    pet_type = session.get(PetType, form.pet_type_id)
    if not pet_type:
        raise HTTPException(status_code=404, detail="Pet type not found")
    pet = shop_service.change_pet(session, student, pet_type)
    return {"message": "Pet changed!", "pet": pet}
