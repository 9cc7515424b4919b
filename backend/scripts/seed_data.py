"""Create the schema and seed an admin account plus a few sample rooms.

Run from the ``backend`` directory:
    python -m scripts.seed_data

Idempotent: the admin is only created if missing, and rooms are only added
to an empty ``rooms`` table.
"""

import asyncio
import logging
import os
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.passwords import hash_password
from app.database import Base, async_session_factory, engine
from app.models import Role, Room, User

logger = logging.getLogger(__name__)

ADMIN_USER = {
    "email": os.environ.get("SEED_ADMIN_EMAIL", "admin@hotelbooking.com"),
    "password": os.environ.get("SEED_ADMIN_PASSWORD", "admin1234"),
    "name": "Hotel Admin",
}

ROOMS = [
    {
        "room_type": "Single",
        "room_price": Decimal("59.00"),
        "room_description": "Compact room with one single bed and a work desk.",
    },
    {
        "room_type": "Double",
        "room_price": Decimal("89.00"),
        "room_description": "Queen bed, city view, en-suite bathroom.",
    },
    {
        "room_type": "Suite",
        "room_price": Decimal("189.00"),
        "room_description": "Separate living area, king bed, and a balcony.",
    },
    {
        "room_type": "Family Suite",
        "room_price": Decimal("229.00"),
        "room_description": "Two bedrooms sleeping up to five guests.",
    },
]


async def seed(session: AsyncSession) -> dict[str, int]:
    """Insert the admin account and sample rooms when they are missing.

    Returns:
        Counts of the rows created, keyed by ``users`` and ``rooms``.
    """
    created = {"users": 0, "rooms": 0}

    result = await session.execute(select(User).where(User.email == ADMIN_USER["email"]))
    if result.scalar_one_or_none() is None:
        session.add(
            User(
                email=ADMIN_USER["email"],
                name=ADMIN_USER["name"],
                hashed_password=hash_password(ADMIN_USER["password"]),
                role=Role.ADMIN,
            )
        )
        created["users"] = 1
    else:
        logger.info("Admin user %s already exists, skipping", ADMIN_USER["email"])

    room_count = (await session.execute(select(func.count()).select_from(Room))).scalar_one()
    if room_count == 0:
        session.add_all(Room(**data) for data in ROOMS)
        created["rooms"] = len(ROOMS)
    else:
        logger.info("Found %d existing rooms, skipping room seed", room_count)

    await session.flush()
    return created


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        created = await seed(session)
        await session.commit()

    logger.info("Seed complete: %d users, %d rooms created", created["users"], created["rooms"])
    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
