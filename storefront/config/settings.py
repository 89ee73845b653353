import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    SECRET_KEY = os.environ.get("SECRET_KEY")
    SERVER_PORT = int(os.environ.get("SERVER_PORT", "8080"))

    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DATABASE = os.environ.get("MONGO_DATABASE", "storefront")
    DB_TIMEOUT_SECONDS = float(os.environ.get("DB_TIMEOUT_SECONDS", "10"))
    CHECKOUT_TIMEOUT_SECONDS = float(os.environ.get("CHECKOUT_TIMEOUT_SECONDS", "30"))

    JWT_SECRET = os.environ.get("JWT_SECRET")
    JWT_EXPIRY_HOURS = int(os.environ.get("JWT_EXPIRY_HOURS", "72"))
    JWT_ISSUER = os.environ.get("JWT_ISSUER", "storefront")
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*").split(",")

    RATE_LIMIT_DEFAULT = os.environ.get("RATE_LIMIT_DEFAULT", "200/hour")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")

    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    ASSISTANT_MODEL = os.environ.get("ASSISTANT_MODEL", "gpt-4o-mini")
    ASSISTANT_BASE_URL = os.environ.get("ASSISTANT_BASE_URL")

    STORE_NAME = os.environ.get("STORE_NAME", "Storefront")
    ORDER_CODE_PREFIX = os.environ.get("ORDER_CODE_PREFIX", "SF")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    DEBUG = False
