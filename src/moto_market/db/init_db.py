"""
moto_market.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables for local development and tests.
- Seed the default admin user when none exists under the configured username.
- Optionally seed demo testimonials and motorcycles into an empty database.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from moto_market.auth.passwords import hash_password
from moto_market.db.base import Base
from moto_market.db.models import Motorcycle, Testimonial
from moto_market.db.repositories.admins import AdminRepo
from moto_market.db.repositories.motorcycles import MotorcycleRepo
from moto_market.db.repositories.testimonials import TestimonialRepo
from moto_market.observability.logging import get_logger
from moto_market.settings import Settings

log = get_logger(__name__)

DEMO_TESTIMONIALS = [
    ("John Kamau", "Nairobi", "Bought my Boxer here. Excellent condition and great service!", "orange"),
    ("Sarah Mwangi", "Embu", "Sold my motorcycle here and got the best price in town.", "blue"),
    ("Peter Omondi", "Meru", "Trustworthy dealers. Six months on and the bike runs perfectly.", "green"),
]

DEMO_MOTORCYCLES = [
    ("SkyGo 150CC", "KSh 85,000", "Low mileage, new tires.", "2021", "15,000 km", "Embu"),
    ("Boxer BM150", "KSh 75,000", "Regularly serviced, new battery.", "2020", "20,000 km", "Nairobi"),
    ("Suzuki 125", "KSh 95,000", "Fuel efficient, smooth engine.", "2022", "8,000 km", "Meru"),
]

DEMO_IMAGE_URL = "https://images.unsplash.com/photo-1558981806-ec527fa84c39?w=500&h=300&fit=crop"


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> bool:
    password = settings.seed_admin_password()
    if password is None:
        log.warning("admin_seed_skipped", reason="MOTO_ADMIN_PASSWORD not set")
        return False

    async with session_factory() as session:
        admins = AdminRepo(session)
        if await admins.get_by_username(settings.admin_username) is not None:
            return False
        await admins.create(
            username=settings.admin_username,
            password_hash=hash_password(password, rounds=settings.bcrypt_rounds),
        )
        await session.commit()
    log.info("admin_seeded", username=settings.admin_username)
    return True


async def seed_demo_data(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        testimonial_count = (await session.execute(select(func.count(Testimonial.id)))).scalar_one()
        if testimonial_count == 0:
            testimonials = TestimonialRepo(session)
            for name, location, text, color in DEMO_TESTIMONIALS:
                await testimonials.create(name=name, location=location, text=text, color=color)

        motorcycle_count = (await session.execute(select(func.count(Motorcycle.id)))).scalar_one()
        if motorcycle_count == 0:
            motorcycles = MotorcycleRepo(session)
            for name, price, description, year, mileage, location in DEMO_MOTORCYCLES:
                moto = await motorcycles.create(
                    name=name,
                    price=price,
                    description=description,
                    year=year,
                    mileage=mileage,
                    location=location,
                )
                await motorcycles.add_image(
                    motorcycle_id=moto.id,
                    image_url=DEMO_IMAGE_URL,
                    image_name="sample-motorcycle.jpg",
                    size=102400,
                    is_primary=True,
                )
        await session.commit()
    log.info("demo_data_seeded")


# --- Module Notes -----------------------------------------------------------
# `init_db` is a dev/test convenience; production runs Alembic migrations instead.
# Admin seeding runs in every environment but is skipped in prod without an explicit password.
