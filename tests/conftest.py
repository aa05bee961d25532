import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from classpet.db import get_session
from classpet.main import app
from classpet.models import (
    Classroom,
    PetFood,
    PetRarity,
    PetType,
    ShopItem,
    ShopItemType,
    Student,
    StudentPet,
    User,
)
from classpet.security import create_access_token

DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


def make_teacher(session: Session, email: str = "teacher@example.com", name: str = "Ms Frizzle") -> User:
    user = User(name=name, email=email)
    user.set_password("password123")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture(name="teacher")
def teacher_fixture(session: Session) -> User:
    return make_teacher(session)


@pytest.fixture(name="headers")
def headers_fixture(teacher: User) -> dict:
    return auth_headers(teacher)


@pytest.fixture(name="classroom")
def classroom_fixture(session: Session, teacher: User) -> Classroom:
    classroom = Classroom(teacher_id=teacher.id, name="Class 4B")
    session.add(classroom)
    session.commit()
    session.refresh(classroom)
    return classroom


@pytest.fixture(name="puppy")
def puppy_fixture(session: Session) -> PetType:
    pet_type = PetType(name="Puppy", base_asset_url="🐕", is_default=True)
    session.add(pet_type)
    session.commit()
    session.refresh(pet_type)
    return pet_type


@pytest.fixture(name="unicorn")
def unicorn_fixture(session: Session) -> PetType:
    pet_type = PetType(name="Unicorn", base_asset_url="🦄", rarity=PetRarity.RARE, price=50, max_level=15)
    session.add(pet_type)
    session.commit()
    session.refresh(pet_type)
    return pet_type


@pytest.fixture(name="cookie")
def cookie_fixture(session: Session) -> PetFood:
    food = PetFood(name="Cookie", emoji="🍪", hunger_restore=15, happiness_boost=5, price=3)
    session.add(food)
    session.commit()
    session.refresh(food)
    return food


@pytest.fixture(name="frame")
def frame_fixture(session: Session) -> ShopItem:
    item = ShopItem(name="Gold Star Frame", type=ShopItemType.AVATAR_FRAME, price=30, preview_emoji="⭐")
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def make_student(
    session: Session,
    classroom: Classroom,
    name: str = "Alice",
    balance: int = 0,
    earned: int | None = None,
    pet_type: PetType | None = None,
    **pet_fields,
) -> Student:
    student = Student(
        classroom_id=classroom.id,
        name=name,
        points_balance=balance,
        total_points_earned=balance if earned is None else earned,
    )
    session.add(student)
    session.commit()
    if pet_type is not None:
        session.add(StudentPet(student_id=student.id, pet_type_id=pet_type.id, **pet_fields))
        session.commit()
    session.refresh(student)
    return student


@pytest.fixture(name="student")
def student_fixture(session: Session, classroom: Classroom, puppy: PetType) -> Student:
    return make_student(session, classroom, balance=100, pet_type=puppy)
