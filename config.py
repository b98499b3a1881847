"""Application configuration module."""

import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _database_uri() -> str:
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    url = URL.create(
        "mysql+pymysql",
        username=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", ""),
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "3306")),
        database=os.getenv("DB_NAME", "portfolio_db"),
        query={"charset": "utf8mb4"},
    )
    return url.render_as_string(hide_password=False)


class Config:
    """Base configuration for the Flask application."""

    # Core
    ENVIRONMENT = os.getenv("APP_ENV") or os.getenv("NODE_ENV", "development")
    DEBUG = ENVIRONMENT == "development"
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    PORT = int(os.getenv("PORT", "8888"))
    API_VERSION = os.getenv("API_VERSION", "v1")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    TRUST_PROXY = int(os.getenv("TRUST_PROXY", "1"))

    # Database
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 10,
        "pool_timeout": 60,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }

    # Tokens and passwords
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me-access")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "change-me-refresh")
    JWT_EXPIRE = os.getenv("JWT_EXPIRE", "7d")
    JWT_REFRESH_EXPIRE = os.getenv("JWT_REFRESH_EXPIRE", "30d")
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Seeded administrator
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Portfolio Admin")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@portfolio.com")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Admin123!@#")

    # Uploads
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", str(Path("uploads").resolve()))
    MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(5 * 1024 * 1024)))
    MAX_FILES = 5

    # Mail
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER = os.getenv("SMTP_USER")
    SMTP_PASS = os.getenv("SMTP_PASS")
    SMTP_TIMEOUT = 30
    FROM_EMAIL = os.getenv("FROM_EMAIL", "no-reply@portfolio.com")
    FROM_NAME = os.getenv("FROM_NAME", "Portfolio Team")

    # Lists
    PAGINATION_COUNT_TOTAL = _env_bool("PAGINATION_COUNT_TOTAL", False)

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "100 per 15 minutes")
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10 per 15 minutes")
    CONTACT_RATE_LIMIT = os.getenv("CONTACT_RATE_LIMIT", "5 per hour")
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
