from sqlmodel import Session, SQLModel

from classpet.db import create_db_and_tables, engine
from classpet.models import Classroom, User
from classpet.services.points import award_points
from classpet.services.roster import create_student

from seeds.catalog import seed_pet_foods, seed_pet_types, seed_shop_items
from seeds.utils import get_or_create

DEMO_STUDENTS = ["Alice", "Ben", "Chloe", "Daniel", "Emma", "Felix"]


def seed_demo_classroom(session: Session) -> Classroom:
    teacher, created = get_or_create(
        session, User, email="teacher@example.com", defaults={"name": "Demo Teacher", "password_hash": ""}
    )
    if created:
        teacher.set_password("Teacher123!")
    classroom, created = get_or_create(session, Classroom, teacher_id=teacher.id, name="Class 4B")
    session.commit()
    if created:
        for index, name in enumerate(DEMO_STUDENTS):
            student = create_student(session, classroom, name)
            award_points(session, student, 10 * (index + 1), "Welcome bonus")
    session.refresh(classroom)
    return classroom


def main():
    SQLModel.metadata.drop_all(engine)
    create_db_and_tables()

    with Session(engine) as session:
        seed_pet_types(session)
        seed_pet_foods(session)
        seed_shop_items(session)
        classroom = seed_demo_classroom(session)
        print("Database seeded. Teacher login: teacher@example.com / Teacher123!")
        print(f"TV board: /tv/{classroom.public_slug}")


if __name__ == '__main__':
    main()
