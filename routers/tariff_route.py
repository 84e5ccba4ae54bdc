from fastapi import APIRouter, Depends, Request

from db.connection import require_database
from models.user_schema import Tariff
from services.tariffs import list_tariffs
from utils.cache import ResponseCache, cache_key, get_response_cache

router = APIRouter(dependencies=[Depends(require_database)])


@router.get("/tariffs", response_model=list[Tariff])
async def get_tariffs(http_request: Request, cache: ResponseCache = Depends(get_response_cache)):
    """Available tariff plans."""
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = list_tariffs()
    cache.put(key, payload)
    return payload
