"""Startup tasks run once the database connection is up."""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from core.config import Settings
from core.roles import UserRole
from db.connection import get_user_collection
from services.users import UserAlreadyExists, create_user

logger = logging.getLogger("Bootstrap")


async def ensure_admin(db: AsyncIOMotorDatabase, settings: Settings) -> bool:
    """Create the administrator account if it is missing. Returns True when created."""
    if await get_user_collection(db).find_one({"phone": settings.admin_phone}, {"_id": 1}):
        logger.info("Administrator account already exists")
        return False
    try:
        await create_user(
            db,
            settings,
            fio=settings.admin_fio,
            phone=settings.admin_phone,
            password=settings.admin_password,
            role=UserRole.admin,
        )
    except UserAlreadyExists:
        # Another worker created it first
        return False
    logger.info("Administrator account created")
    return True


async def backfill_tariffs(db: AsyncIOMotorDatabase, settings: Settings) -> int:
    """Assign the default tariff to users with a missing, null or empty one."""
    user_collection = get_user_collection(db)
    result = await user_collection.update_many(
        {"$or": [{"tariff": {"$exists": False}}, {"tariff": None}, {"tariff": ""}]},
        {"$set": {"tariff": settings.default_tariff}},
    )
    logger.info(f"Tariff backfill: matched {result.matched_count}, modified {result.modified_count}")

    total_users = await user_collection.count_documents({})
    users_with_tariff = await user_collection.count_documents({"tariff": {"$nin": [None, ""]}})
    logger.info(f"Users total: {total_users}, with tariff: {users_with_tariff}")

    if logger.isEnabledFor(logging.DEBUG):
        async for user in user_collection.find({}, {"_id": 0, "fio": 1, "phone": 1, "tariff": 1}):
            logger.debug(f"  - {user.get('fio')} ({user.get('phone')}): tariff = {user.get('tariff') or 'NONE'}")

    return result.modified_count
