"""
Subscriber cabinet endpoints.

Read endpoints marked as cached follow the same steps: look the request up in
the response cache, compute the payload on a miss and store it before returning.
Every endpoint that changes subscriber state invalidates cached responses whose
key mentions the subscriber's phone number.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from db.connection import get_db, require_database
from models.user_schema import (
    CallRecord,
    CreditInfoResponse,
    MessageResponse,
    Notification,
    PaymentRecord,
    ServiceItem,
    ServiceToggleRequest,
    SettingsUpdateRequest,
    SettingsUpdateResponse,
    TariffChangeRequest,
    TariffChangeResponse,
    TopUpRequest,
    TopUpResponse,
    UsageResponse,
    UserDataResponse,
)
from services import catalog
from services import users as user_service
from services.tariffs import get_tariff_info, is_known_tariff
from utils.cache import ResponseCache, cache_key, get_response_cache

router = APIRouter(dependencies=[Depends(require_database)])
logger = logging.getLogger("UserRouter")


def _require_phone(phone: Optional[str]) -> str:
    if not phone:
        raise HTTPException(status_code=400, detail="Phone number is required")
    return phone


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="User not found")


@router.get("/user/data", response_model=UserDataResponse)
async def get_user_data(phone: Optional[str] = None, db: AsyncIOMotorDatabase = Depends(get_db)):
    phone = _require_phone(phone)
    try:
        user = await user_service.find_user_by_phone(db, phone)
    except Exception as e:
        logger.error(f"Error fetching user data: {e}")
        raise HTTPException(status_code=500, detail="Error fetching user data")
    if not user:
        raise _user_not_found()

    profile = user_service.to_profile(user, include_role=False)
    profile["currentTariffId"] = user.get("tariff")
    return profile


@router.put("/user/settings", response_model=SettingsUpdateResponse)
async def update_user_settings(
    request: SettingsUpdateRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        user = await user_service.update_fio(db, request.phone, request.fio)
    except Exception as e:
        logger.error(f"Error saving settings: {e}")
        raise HTTPException(status_code=500, detail="Error saving settings")
    if not user:
        raise _user_not_found()

    cache.invalidate_by_substring(request.phone)
    return {
        "success": True,
        "message": "Settings saved",
        "user": user_service.to_profile(user, include_role=False),
    }


@router.post("/payment/topup", response_model=TopUpResponse)
async def top_up_balance(
    request: TopUpRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    try:
        user = await user_service.top_up_balance(db, request.phone, request.amount)
    except Exception as e:
        logger.error(f"Error topping up balance: {e}")
        raise HTTPException(status_code=500, detail="Error topping up balance")
    if not user:
        raise _user_not_found()

    cache.invalidate_by_substring(request.phone)
    logger.info(f"Balance of {request.phone} topped up by {request.amount}")
    return {"success": True, "message": "Balance topped up", "newBalance": user["balance"]}


@router.get("/user/calls", response_model=list[CallRecord])
async def get_call_history(
    http_request: Request,
    phone: Optional[str] = None,
    cache: ResponseCache = Depends(get_response_cache),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = [dict(call) for call in catalog.CALL_HISTORY]
    cache.put(key, payload)
    return payload


@router.get("/user/payments", response_model=list[PaymentRecord])
async def get_payment_history(
    http_request: Request,
    phone: Optional[str] = None,
    cache: ResponseCache = Depends(get_response_cache),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = [dict(payment) for payment in catalog.PAYMENT_HISTORY]
    cache.put(key, payload)
    return payload


@router.get("/user/services", response_model=list[ServiceItem])
async def get_services(
    http_request: Request,
    phone: Optional[str] = None,
    cache: ResponseCache = Depends(get_response_cache),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = [dict(service) for service in catalog.SERVICES]
    cache.put(key, payload)
    return payload


@router.get("/user/usage", response_model=UsageResponse)
async def get_usage(
    http_request: Request,
    phone: Optional[str] = None,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    phone = _require_phone(phone)
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    try:
        user = await user_service.find_user_by_phone(db, phone, {"_id": 0, "tariff": 1})
    except Exception as e:
        logger.error(f"Error fetching usage data: {e}")
        raise HTTPException(status_code=500, detail="Error fetching usage data")
    if not user:
        raise _user_not_found()

    payload = {name: dict(meter) for name, meter in catalog.USAGE_METERS.items()}
    payload["tariff"] = get_tariff_info(user.get("tariff"))
    cache.put(key, payload)
    return payload


@router.post("/user/services/toggle", response_model=MessageResponse)
async def toggle_service(request: ServiceToggleRequest, cache: ResponseCache = Depends(get_response_cache)):
    cache.invalidate_by_substring(request.phone)
    state = "connected" if request.activate else "disconnected"
    logger.info(f"Service '{request.service_name}' {state} for {request.phone}")
    return {"success": True, "message": f'Service "{request.service_name}" {state}'}


@router.post("/user/tariff/change", response_model=TariffChangeResponse)
async def change_tariff(
    request: TariffChangeRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    if not is_known_tariff(request.tariff_id):
        raise HTTPException(status_code=400, detail=f"Unknown tariff: {request.tariff_id}")
    try:
        user = await user_service.change_tariff(db, request.phone, request.tariff_id)
    except Exception as e:
        logger.error(f"Error changing tariff: {e}")
        raise HTTPException(status_code=500, detail="Error changing tariff")
    if not user:
        raise _user_not_found()

    cache.invalidate_by_substring(request.phone)
    logger.info(f"Tariff of {request.phone} changed to {request.tariff_id}")
    return {"success": True, "message": "Tariff changed successfully", "newTariff": request.tariff_id}


@router.get("/user/credit-info", response_model=CreditInfoResponse)
async def get_credit_info(phone: Optional[str] = None, db: AsyncIOMotorDatabase = Depends(get_db)):
    phone = _require_phone(phone)
    try:
        user = await user_service.find_user_by_phone(
            db, phone, {"_id": 0, "balance": 1, "credit_limit": 1, "tariff": 1}
        )
    except Exception as e:
        logger.error(f"Error fetching credit info: {e}")
        raise HTTPException(status_code=500, detail="Error fetching credit info")
    if not user:
        raise _user_not_found()

    balance = user.get("balance", 0)
    credit_limit = user.get("credit_limit", 0)
    return {
        "currentBalance": balance,
        "creditLimit": credit_limit,
        "availableCredit": max(0, credit_limit + balance),
        "isInDebt": balance < 0,
        "tariff": get_tariff_info(user.get("tariff")),
    }


@router.get("/user/notifications", response_model=list[Notification])
async def get_notifications(
    http_request: Request,
    phone: Optional[str] = None,
    cache: ResponseCache = Depends(get_response_cache),
):
    key = cache_key(http_request)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = [dict(notification) for notification in catalog.NOTIFICATIONS]
    cache.put(key, payload)
    return payload


@router.get("/debug/user")
async def debug_user(phone: Optional[str] = None, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Raw user document (without the password hash) for troubleshooting."""
    phone = _require_phone(phone)
    user = await user_service.find_user_by_phone(db, phone)
    logger.info(f"Debug lookup for {phone}: {'found' if user else 'not found'}")
    if not user:
        raise _user_not_found()
    return {
        "user": user,
        "tariffInfo": get_tariff_info(user.get("tariff")),
        "currentTariffId": user.get("tariff"),
    }
