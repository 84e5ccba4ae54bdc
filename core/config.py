from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    app_name: str = Field(default="Mobile Operator Portal", alias="APP_NAME")
    environment: Literal["development", "staging", "production"] = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    mongo_uri: str = Field(default="mongodb://localhost:27017", alias="MONGO_URI")
    mongo_db_name: str = Field(default="mobile_operator", alias="MONGO_DB_NAME")
    mongo_server_selection_timeout_ms: int = Field(default=5000, alias="MONGO_SERVER_SELECTION_TIMEOUT_MS")
    mongo_socket_timeout_ms: int = Field(default=45000, alias="MONGO_SOCKET_TIMEOUT_MS")

    # Single TTL shared by every cached response
    cache_ttl_seconds: float = Field(default=60.0, gt=0, alias="CACHE_TTL_SECONDS")

    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")

    admin_fio: str = Field(default="Administrator", alias="ADMIN_FIO")
    admin_phone: str = Field(default="+375256082909", alias="ADMIN_PHONE")
    admin_password: str = Field(default="123123", alias="ADMIN_PASSWORD")

    default_tariff: str = Field(default="standard", alias="DEFAULT_TARIFF")
    default_credit_limit: float = Field(default=100, alias="DEFAULT_CREDIT_LIMIT")
    client_list_limit: int = Field(default=100, gt=0, alias="CLIENT_LIST_LIMIT")

    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_HEADERS")

    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    docs_url: Optional[str] = Field(default="/docs", alias="DOCS_URL")
    redoc_url: Optional[str] = Field(default="/redoc", alias="REDOC_URL")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()  # type: ignore[call-arg]
