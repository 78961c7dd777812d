import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

PLACEHOLDER_JWT_SECRET = "change-me-in-production"

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = ""
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_NAME: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: int = 10  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 3600

    # Tokens
    JWT_SECRET: str = PLACEHOLDER_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_SECONDS: int = 7 * 24 * 3600

    # CORS
    CORS_ORIGINS: str = ""
    CORS_PRODUCTION_DOMAIN: str = "filemyrti.com"

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 900  # 15 minutes
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_AUTH_MAX_REQUESTS: int = 5
    REDIS_URL: Optional[str] = None

    # Startup
    RUN_MIGRATIONS: bool = True
    SEED_REFERENCE_DATA: bool = True

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def database_url(self) -> str:
        """
        Resolve the SQLAlchemy URL.
        DATABASE_URL wins; otherwise it is assembled from the DB_* parts,
        and a local SQLite file is the last resort for development.
        """
        url = self.DATABASE_URL.strip()

        # Some hosting panels store the value as "DATABASE_URL=..."
        prefix = "DATABASE_URL="
        if url.startswith(prefix):
            url = url[len(prefix):].strip()
        if url:
            return url

        if self.DB_HOST and self.DB_USER and self.DB_NAME:
            password = self.DB_PASSWORD or ""
            return (
                f"mysql+pymysql://{self.DB_USER}:{password}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
            )

        sqlite_path = BASE_DIR / "filemyrti.db"
        logger.warning(
            "DATABASE_URL and DB_* settings not found. Falling back to SQLite at %s",
            sqlite_path,
        )
        return f"sqlite:///{sqlite_path.as_posix()}"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.is_development:
            origins.extend(o for o in DEV_ORIGINS if o not in origins)
        return origins

    @property
    def cors_origin_regex(self) -> Optional[str]:
        """In production every https subdomain of the production domain is allowed."""
        if not self.is_production or not self.CORS_PRODUCTION_DOMAIN:
            return None
        domain = self.CORS_PRODUCTION_DOMAIN.strip().replace(".", r"\.")
        return rf"https://([a-z0-9-]+\.)*{domain}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
