from typing import Optional

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from db.connection import MongoDatabase
from services.bootstrap import backfill_tariffs, ensure_admin
from utils.cache import ResponseCache
from utils.logging import configure_logging, logger

# Routers
from routers.admin_route import router as admin_router
from routers.auth_route import router as auth_router
from routers.tariff_route import router as tariff_router
from routers.user_route import router as user_router


# Lifespan Events (Startup/Shutdown)
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: MongoDatabase = app.state.database
    logger.info(f"Starting up {settings.app_name}...")
    await database.connect()
    await ensure_admin(database.db, settings)
    await backfill_tariffs(database.db, settings)
    logger.info(f"Response cache TTL: {settings.cache_ttl_seconds}s")
    yield
    logger.info(f"Shutting down {settings.app_name}...")
    database.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Mobile operator customer portal API.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
    )
    app.state.settings = settings
    app.state.database = MongoDatabase(settings)
    app.state.response_cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds)

    # Route dependencies resolve settings from the app that owns them
    app.dependency_overrides[get_settings] = lambda: settings

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Routers
    app.include_router(auth_router, prefix=settings.api_prefix, tags=["Authentication"])
    app.include_router(user_router, prefix=settings.api_prefix, tags=["Subscriber"])
    app.include_router(tariff_router, prefix=settings.api_prefix, tags=["Tariffs"])
    app.include_router(admin_router, prefix=settings.api_prefix, tags=["Administration"])

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    # Health & Root Endpoints
    @app.get("/health", tags=["System"], summary="Health Check")
    async def health_check():
        """Check if the API is running and whether MongoDB is reachable."""
        return {"status": "ok", "database": app.state.database.is_connected}

    return app


app = create_app()
