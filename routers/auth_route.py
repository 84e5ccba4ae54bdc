import logging
from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

# Local imports
from core.config import Settings, get_settings
from core.roles import UserRole
from db.connection import get_db, require_database
from models.user_schema import AuthResponse, LoginRequest, RegisterRequest
from services.users import UserAlreadyExists, authenticate_user, create_user, to_profile

router = APIRouter(dependencies=[Depends(require_database)])
logger = logging.getLogger("AuthRouter")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user = await create_user(db, settings, fio=request.fio, phone=request.phone, password=request.password)
        return {
            "success": True,
            "message": "Registration successful",
            "redirect": UserRole.client.landing_page,
            "user": to_profile(user),
        }
    except UserAlreadyExists:
        raise HTTPException(status_code=400, detail="User with this phone number already exists")
    except Exception as e:
        logger.error(f"Error in User Registration: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/login", response_model=AuthResponse)
async def login_user(request: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        user = await authenticate_user(db, request.phone, request.password)
    except Exception as e:
        logger.error(f"Error in Login: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid phone number or password",
        )

    role = UserRole(user.get("role", UserRole.client.value))
    logger.info(f"{role.value} {user['phone']} logged in")
    return {"success": True, "redirect": role.landing_page, "user": to_profile(user)}
