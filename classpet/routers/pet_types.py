from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import require_user
from classpet.errors import DuplicateName, PetTypeInUse
from classpet.models import PetRarity, PetType, StudentPet
from classpet.schemas.pet import PetTypeForm, PetTypeRead
from classpet.services import shop as shop_service

router = APIRouter(tags=["pet types"], dependencies=[Depends(require_user)])


def _get_pet_type(session: Session, pet_type_id: int) -> PetType:
    pet_type = session.get(PetType, pet_type_id)
    if not pet_type:
        raise HTTPException(status_code=404, detail="Pet type not found")
    return pet_type


def _ensure_unique_name(session: Session, name: str, exclude_id: int | None = None) -> None:
    stmt = select(PetType).where(PetType.name == name)
    if exclude_id is not None:
        stmt = stmt.where(PetType.id != exclude_id)
    if session.exec(stmt).first():
        raise DuplicateName(f"A pet type named {name!r} already exists.")


@router.get("/pet-types", response_model=list[PetTypeRead])
def list_pet_types(session: Session = Depends(get_session)):
    return session.exec(select(PetType).order_by(PetType.id)).all()


@router.post("/pet-types", response_model=PetTypeRead, status_code=status.HTTP_201_CREATED)
def create_pet_type(form: PetTypeForm, session: Session = Depends(get_session)):
    _ensure_unique_name(session, form.name)
    pet_type = PetType(**form.model_dump())
    session.add(pet_type)
    session.commit()
    session.refresh(pet_type)
    return pet_type


@router.get("/pet-types/{pet_type_id}", response_model=PetTypeRead)
def show_pet_type(pet_type_id: int, session: Session = Depends(get_session)):
    return _get_pet_type(session, pet_type_id)


@router.put("/pet-types/{pet_type_id}", response_model=PetTypeRead)
def update_pet_type(pet_type_id: int, form: PetTypeForm, session: Session = Depends(get_session)):
    pet_type = _get_pet_type(session, pet_type_id)
    _ensure_unique_name(session, form.name, exclude_id=pet_type.id)
    for key, value in form.model_dump(exclude_unset=True).items():
        setattr(pet_type, key, value)
    session.add(pet_type)
    session.commit()
    session.refresh(pet_type)
    return pet_type


@router.delete("/pet-types/{pet_type_id}")
def delete_pet_type(pet_type_id: int, session: Session = Depends(get_session)):
    pet_type = _get_pet_type(session, pet_type_id)
    in_use = session.exec(select(func.count()).select_from(StudentPet).where(StudentPet.pet_type_id == pet_type.id)).one()
    if in_use:
        raise PetTypeInUse()
    session.delete(pet_type)
    session.commit()
    return {"message": "Pet type deleted."}


@router.get("/pet-types-default", response_model=list[PetTypeRead])
def default_pet_types(session: Session = Depends(get_session)):
    """Free starter pets a new student can pick from."""
    stmt = select(PetType).where(PetType.is_active == True, PetType.rarity == PetRarity.NORMAL)  # noqa: E712
    return session.exec(stmt.order_by(PetType.id)).all()


@router.get("/pet-types-shop", response_model=list[PetTypeRead])
def shop_pet_types(session: Session = Depends(get_session)):
    return shop_service.shop_pet_types(session)
