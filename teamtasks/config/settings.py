# teamtasks/config/settings.py
# Application configuration read from the environment (.env supported)

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Runtime configuration for the tracker API"""

    # Storage
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./teamtasks.db")
    # Only applied to PostgreSQL URLs (Render / Railway style deployments)
    DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE", "require")

    # Session tokens
    SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-in-production")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", 7))
    COOKIE_NAME = os.getenv("COOKIE_NAME", "token")
    COOKIE_SECURE = _as_bool(os.getenv("COOKIE_SECURE", "false"))

    # Registration
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))
    MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", 6))
    ADMIN_CODE_BYTES = int(os.getenv("ADMIN_CODE_BYTES", 4))
    ADMIN_CODE_MAX_ATTEMPTS = int(os.getenv("ADMIN_CODE_MAX_ATTEMPTS", 5))

    # HTTP
    API_PREFIX = os.getenv("API_PREFIX", "/api")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 8000))
    RELOAD = _as_bool(os.getenv("RELOAD", "true"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Split the comma separated CORS_ORIGINS value"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def is_sqlite(cls, url: str = None) -> bool:
        return (url or cls.DATABASE_URL).lower().startswith("sqlite")


settings = Settings()
