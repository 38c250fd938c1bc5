"""Database seeder for local development and manual GraphQL testing."""
import asyncio
import argparse
import random
import time

from app.config import settings
from app.database import engine, async_session, Base
from app.models import City, Customer, SocialStatus, User, UserRole
from app.schemas import compose_display_name
from app.services.passwords import hash_password

ROLES = [("admin", "Full access"), ("user", "Regular operator")]

CITIES = ["Moscow", "Saint Petersburg", "Kazan", "Novosibirsk", "Yekaterinburg",
          "Nizhny Novgorod", "Samara", "Omsk", "Rostov-on-Don", "Ufa"]

SOCIAL_STATUSES = ["Employed", "Self-employed", "Student", "Retired", "Unemployed"]

FIRST_NAMES = ["Ivan", "Petr", "Anna", "Maria", "Sergey", "Olga", "Dmitry", "Elena"]
SECOND_NAMES = ["Ivanov", "Petrov", "Sidorov", "Smirnov", "Kuznetsov", "Popov"]
MIDDLE_NAMES = ["Ivanovich", "Petrovich", "Sergeevich", None]


async def seed(small: bool = False):
    num_users = 5 if small else 20
    num_customers = 50 if small else 1000

    print(f"Seeding: {num_users} users, {num_customers} customers")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    # One hash for every seeded account keeps seeding fast at 12 rounds.
    password_hash = await hash_password("password", settings.BCRYPT_ROUNDS)

    async with async_session() as session:
        session.add_all(UserRole(name=name, description=desc) for name, desc in ROLES)

        cities = [City(city_name=name) for name in CITIES]
        statuses = [SocialStatus(social_status_name=name) for name in SOCIAL_STATUSES]
        session.add_all(cities + statuses)
        await session.flush()
        print(f"  Created {len(cities)} cities, {len(statuses)} social statuses")

        for i in range(num_users):
            first, second = random.choice(FIRST_NAMES), random.choice(SECOND_NAMES)
            middle = random.choice(MIDDLE_NAMES)
            session.add(User(
                username=f"user_{i:04d}",
                password_hash=password_hash,
                first_name=first,
                second_name=second,
                middle_name=middle,
                display_name=compose_display_name(second, first, middle),
                user_role_name="admin" if i == 0 else "user",
            ))
        await session.flush()
        print(f"  Created {num_users} users (user_0000 is admin, password 'password')")

        for i in range(num_customers):
            first, second = random.choice(FIRST_NAMES), random.choice(SECOND_NAMES)
            middle = random.choice(MIDDLE_NAMES)
            session.add(Customer(
                first_name=first,
                second_name=second,
                middle_name=middle,
                display_name=compose_display_name(second, first, middle),
                phone=f"+7900{i:07d}",
                email=f"customer_{i:05d}@example.com",
                city_id=random.choice(cities).id,
                social_status_id=random.choice(statuses).id,
            ))
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the registry database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (50 customers)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
