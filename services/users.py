"""Subscriber account operations on the ``users`` collection."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from core.config import Settings
from core.roles import UserRole
from db.connection import get_user_collection
from services.tariffs import get_tariff_info
from utils.encryption import hash_password, verify_password

logger = logging.getLogger("UserService")

PUBLIC_PROJECTION = {"_id": 0, "password": 0}


class UserAlreadyExists(Exception):
    def __init__(self, phone: str) -> None:
        super().__init__(f"User with phone {phone} already exists")
        self.phone = phone


def build_user_document(
    settings: Settings,
    fio: str,
    phone: str,
    password: str,
    role: UserRole = UserRole.client,
) -> Dict[str, Any]:
    return {
        "fio": fio,
        "phone": phone,
        "password": hash_password(password, rounds=settings.bcrypt_rounds),
        "role": role.value,
        "balance": 0,
        "tariff": settings.default_tariff,
        "credit_limit": settings.default_credit_limit,
        "status": "active",
        "created_at": datetime.now(timezone.utc),
    }


def to_profile(user: Dict[str, Any], include_role: bool = True) -> Dict[str, Any]:
    """Shape a user document as the public profile payload."""
    profile = {
        "fio": user["fio"],
        "phone": user["phone"],
        "balance": user.get("balance", 0),
        "creditLimit": user.get("credit_limit", 0),
        "status": user.get("status", "active"),
        "tariff": get_tariff_info(user.get("tariff")),
    }
    if include_role:
        profile["role"] = user.get("role", UserRole.client.value)
    return profile


async def find_user_by_phone(
    db: AsyncIOMotorDatabase, phone: str, projection: Optional[Dict[str, int]] = None
) -> Optional[Dict[str, Any]]:
    return await get_user_collection(db).find_one({"phone": phone}, projection or PUBLIC_PROJECTION)


async def create_user(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    fio: str,
    phone: str,
    password: str,
    role: UserRole = UserRole.client,
) -> Dict[str, Any]:
    user_collection = get_user_collection(db)
    if await user_collection.find_one({"phone": phone}, {"_id": 1}):
        raise UserAlreadyExists(phone)

    user_data = build_user_document(settings, fio, phone, password, role)
    try:
        await user_collection.insert_one(user_data)
    except DuplicateKeyError as e:
        raise UserAlreadyExists(phone) from e
    logger.info(f"Registered {role.value} {phone}")
    user_data.pop("_id", None)
    user_data.pop("password", None)
    return user_data


async def authenticate_user(db: AsyncIOMotorDatabase, phone: str, password: str) -> Optional[Dict[str, Any]]:
    user = await get_user_collection(db).find_one({"phone": phone}, {"_id": 0})
    if not user or not verify_password(password, user.get("password", "")):
        return None
    user.pop("password", None)
    return user


async def _update_user(db: AsyncIOMotorDatabase, phone: str, update: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await get_user_collection(db).find_one_and_update(
        {"phone": phone},
        update,
        projection=PUBLIC_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )


async def update_fio(db: AsyncIOMotorDatabase, phone: str, fio: str) -> Optional[Dict[str, Any]]:
    return await _update_user(db, phone, {"$set": {"fio": fio}})


async def top_up_balance(db: AsyncIOMotorDatabase, phone: str, amount: float) -> Optional[Dict[str, Any]]:
    return await _update_user(db, phone, {"$inc": {"balance": amount}})


async def change_tariff(db: AsyncIOMotorDatabase, phone: str, tariff_id: str) -> Optional[Dict[str, Any]]:
    return await _update_user(db, phone, {"$set": {"tariff": tariff_id}})
