import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from core.config import Settings, get_settings
from core.roles import UserRole
from db.connection import get_db, get_user_collection, require_database
from models.user_schema import ClientSummary
from services.tariffs import get_tariff_info
from utils.cache import ResponseCache, cache_key, get_response_cache

router = APIRouter(dependencies=[Depends(require_database)])
logger = logging.getLogger("AdminRouter")

CLIENT_PROJECTION = {"_id": 0, "fio": 1, "phone": 1, "balance": 1, "status": 1, "tariff": 1, "created_at": 1}


def _with_tariff_info(client: dict) -> dict:
    created_at = client.get("created_at")
    return {
        "fio": client["fio"],
        "phone": client["phone"],
        "balance": client.get("balance", 0),
        "status": client.get("status"),
        "tariff": client.get("tariff"),
        "createdAt": created_at.isoformat() if created_at else None,
        "tariffInfo": get_tariff_info(client.get("tariff")),
    }


@router.get("/clients", response_model=list[ClientSummary])
async def list_clients(
    http_request: Request,
    search: Optional[str] = None,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    query: dict = {"role": UserRole.client.value}
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {"fio": {"$regex": pattern, "$options": "i"}},
            {"phone": {"$regex": pattern, "$options": "i"}},
        ]

    try:
        cursor = (
            get_user_collection(db)
            .find(query, CLIENT_PROJECTION)
            .sort("created_at", -1)
            .limit(settings.client_list_limit)
        )
        clients = await cursor.to_list(length=settings.client_list_limit)
    except Exception as e:
        logger.error(f"Error fetching clients: {e}")
        raise HTTPException(status_code=500, detail="Error fetching clients")

    payload = [_with_tariff_info(client) for client in clients]
    cache.put(key, payload)
    return payload


@router.get("/reports/debtors", response_model=list[ClientSummary])
async def list_debtors(
    http_request: Request,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    try:
        cursor = (
            get_user_collection(db)
            .find({"role": UserRole.client.value, "balance": {"$lt": 0}}, CLIENT_PROJECTION)
            .sort("balance", 1)
        )
        debtors = await cursor.to_list(length=None)
    except Exception as e:
        logger.error(f"Error building debtors report: {e}")
        raise HTTPException(status_code=500, detail="Error building debtors report")

    payload = [_with_tariff_info(debtor) for debtor in debtors]
    cache.put(key, payload)
    return payload
