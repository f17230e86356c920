# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.data.models.catalog import CatalogModel
from storefront.data.models.user import UserModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_USERS = [
    {"id": 1, "name": "Ada Customer", "email": "ada@example.com", "user_type": "customer"},
    {"id": 2, "name": "Ben Customer", "email": "ben@example.com", "user_type": "customer"},
    {"id": 3, "name": "Store Admin", "email": "admin@example.com", "user_type": "admin"},
]

DEMO_MODELS = [
    {"id": 7, "name": "Oak Lounge Chair", "description": "Solid oak, linen seat", "estimated_price": Decimal("49.99"),
     "preview_url": "/previews/7.png", "thumbnail_url": "/thumbs/7.png"},
    {"id": 8, "name": "Walnut Dining Table", "description": "Seats six", "estimated_price": Decimal("349.50"),
     "preview_url": None, "thumbnail_url": "/thumbs/8.png"},
    {"id": 9, "name": "Linen Sofa", "description": "Price on request", "estimated_price": None,
     "preview_url": "/previews/9.png", "thumbnail_url": None},
]


async def seed(SessionLocal: async_sessionmaker[AsyncSession]):
    async with SessionLocal() as db:
        # not forcing: only seed if empty
        if (await db.execute(select(UserModel.id).limit(1))).first():
            return
        db.add_all([UserModel(**u) for u in DEMO_USERS])
        db.add_all([CatalogModel(**m) for m in DEMO_MODELS])
        await db.commit()
        logger.info(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_MODELS)} catalog models")
