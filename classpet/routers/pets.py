from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from classpet.db import get_session
from classpet.dependencies import get_student, require_user
from classpet.models import PetFood, PetType, Student
from classpet.schemas.pet import (
    BuyFoodForm,
    BuyFoodResult,
    BuyPetResult,
    FeedForExpForm,
    FeedPetForm,
    FeedPetResult,
    InventoryRead,
    PetDetails,
    PetFoodRead,
    PetTypeChoice,
)
from classpet.schemas.student import FeedForExpResult
from classpet.services import inventory as inventory_service
from classpet.services import pets as pet_service

router = APIRouter(tags=["pets"])


def get_food_or_404(session: Session, pet_food_id: int) -> PetFood:
    food = session.get(PetFood, pet_food_id)
    if not food:
        raise HTTPException(status_code=404, detail="Pet food not found")
    return food


def pet_details(session: Session, student: Student) -> dict:
    pet = student.pet
    if not pet:
        raise HTTPException(status_code=404, detail="This student has no pet")
    pet_service.refresh_mood(session, pet)
    return {"pet": pet, "inventory": inventory_service.list_inventory(session, student)}


def feed_pet(session: Session, student: Student, pet_food_id: int) -> dict:
    food = get_food_or_404(session, pet_food_id)
    stats = inventory_service.feed_from_inventory(session, student, food)
    pet = student.pet
    return {
        "message": f"Fed {pet.nickname or pet.type.name} a {food.name}! {food.emoji}",
        "pet": pet,
        "stats": stats,
    }


@router.get("/pet-foods", response_model=list[PetFoodRead], dependencies=[Depends(require_user)])
def list_foods(session: Session = Depends(get_session)):
    stmt = select(PetFood).where(PetFood.is_active == True).order_by(PetFood.price, PetFood.id)  # noqa: E712
    return session.exec(stmt).all()


@router.get("/students/{student_id}/inventory", response_model=list[InventoryRead])
def get_inventory(student: Student = Depends(get_student), session: Session = Depends(get_session)):
    return inventory_service.list_inventory(session, student)


@router.post("/students/{student_id}/buy-food", response_model=BuyFoodResult)
def buy_food(form: BuyFoodForm, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    food = get_food_or_404(session, form.pet_food_id)
    row = inventory_service.buy_food(session, student, food, form.quantity)
    return {
        "message": f"Bought {form.quantity} {food.name}!",
        "inventory": row,
        "new_balance": student.points_balance,
    }


@router.post("/students/{student_id}/feed-pet", response_model=FeedPetResult)
def feed_pet_from_bag(form: FeedPetForm, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    return feed_pet(session, student, form.pet_food_id)


@router.get("/students/{student_id}/pet-details", response_model=PetDetails)
def get_pet_details(student: Student = Depends(get_student), session: Session = Depends(get_session)):
    return pet_details(session, student)


@router.post("/students/{student_id}/buy-pet", response_model=BuyPetResult)
def buy_pet(form: PetTypeChoice, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    pet_type = session.get(PetType, form.pet_type_id)
    if not pet_type:
        raise HTTPException(status_code=404, detail="Pet type not found")
    pet = pet_service.buy_pet(session, student, pet_type)
    return {
        "message": f"Welcome, {pet_type.name}!",
        "pet": pet,
        "new_balance": student.points_balance,
    }


@router.post("/students/{student_id}/feed", response_model=FeedForExpResult)
def feed_for_exp(form: FeedForExpForm, student: Student = Depends(get_student), session: Session = Depends(get_session)):
    """Spend coins on pet EXP (10 coins and 50 EXP per unit)."""
    return pet_service.feed_for_exp(session, student, form.food_amount)
